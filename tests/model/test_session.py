"""
Tests for game sessions and the in-memory session store.
"""

import os

from model.session import GameSessionKey, GameSessionState, InMemorySessionStore

KEY = GameSessionKey(1000, 201)


class TestGameSessionState:

    def test_start(self):
        state = GameSessionState(1000, 201).start(voice_channel_id=300, status_channel_id=201)

        assert state.is_active
        assert state.running
        assert len(state.connect_code) == 8
        assert state.voice_channel_id == 300
        assert state.status_channel_id == 201

    def test_end_keeps_identity(self):
        state = GameSessionState(1000, 201).start()
        state.link_player(4, "red")

        state.end()

        assert not state.is_active
        assert state.key == KEY
        assert state.linked_players == {}
        assert state.status_channel_id is None

    def test_link_color_or_name(self):
        state = GameSessionState(1000, 201)

        assert state.link_player(4, "Red").color == "red"
        assert state.link_player(5, "Soupy").in_game_name == "Soupy"

    def test_clear_player_data(self):
        state = GameSessionState(1000, 201)
        state.link_player(4, "red")

        assert state.clear_player_data(4) is True
        assert state.clear_player_data(4) is False

    def test_to_dict_uses_string_keys(self):
        state = GameSessionState(1000, 201)
        state.link_player(4, "red")

        data = state.to_dict()

        assert data['linked_players'] == {'4': {'user_id': 4, 'color': 'red', 'in_game_name': None}}


class TestInMemorySessionStore:

    def setup_method(self):
        self.store = InMemorySessionStore()

    def test_missing_session_is_blank(self):
        state = self.store.get(KEY)

        assert state.key == KEY
        assert not state.is_active

    def test_get_returns_a_copy(self):
        self.store.put(GameSessionState(1000, 201).start())

        state = self.store.get(KEY)
        state.link_player(4, "red")

        assert self.store.get(KEY).linked_players == {}

    def test_inactive_sessions_are_dropped(self):
        state = GameSessionState(1000, 201).start()
        self.store.put(state)
        self.store.put(state.end())

        assert self.store.active_count() == 0

    def test_backup_and_load(self, tmp_path):
        filename = str(tmp_path / "sessions.pckl")
        state = GameSessionState(1000, 201).start()
        state.link_player(4, "red")
        self.store.put(state)

        self.store.backup(filename)
        restored = InMemorySessionStore.load(filename)

        assert restored.active_count() == 1
        assert restored.get(KEY).linked_players[4].color == "red"
        assert restored.get(KEY).connect_code == state.connect_code

    def test_load_without_backup(self, tmp_path):
        filename = str(tmp_path / "missing.pckl")

        assert InMemorySessionStore.load(filename).active_count() == 0
        assert not os.path.exists(filename)
