"""Tests for plugin registry."""

from typing import ClassVar

import pytest

from yinsh_engine.engine.errors import UnknownGameError
from yinsh_engine.engine.models import (
    Action,
    Event,
    GameConfig,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)
from yinsh_engine.engine.protocol import GamePlugin
from yinsh_engine.engine.registry import PluginRegistry
from yinsh_engine.engine.validation import validate_plugin
from yinsh_engine.games.yinsh.plugin import YinshPlugin
from yinsh_engine.main import create_registry


class MockPlugin:
    """Mock game plugin for testing."""

    game_id: ClassVar[str] = "mock-game"
    display_name: ClassVar[str] = "Mock Game"
    min_players: ClassVar[int] = 2
    max_players: ClassVar[int] = 4
    description: ClassVar[str] = "A mock game for testing"
    config_schema: ClassVar[dict] = {}

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        game_data = {"turn": 0}
        phase = Phase(
            name="play",
            expected_actions=[
                {"player_id": players[0].player_id, "action_type": "play"}
            ],
        )
        return game_data, phase, [Event(event_type="game_started")]

    def validate_config(self, options: dict) -> list[str]:
        return []

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        return [{"action_type": "play"}]

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        return None

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        new_data = game_data.copy()
        new_data["turn"] = game_data.get("turn", 0) + 1
        return TransitionResult(
            game_data=new_data,
            events=[Event(event_type="action_applied")],
            next_phase=phase,
        )

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        return {"turn": game_data["turn"]}


class BrokenPlugin(MockPlugin):
    """Plugin whose setup blows up."""

    game_id: ClassVar[str] = "broken-game"

    def create_initial_state(self, players, config):
        raise RuntimeError("no board")


class TestPluginRegistry:
    """Tests for PluginRegistry."""

    def test_register_plugin(self):
        registry = PluginRegistry()
        plugin = MockPlugin()

        registry.register(plugin)

        assert registry.get("mock-game") == plugin

    def test_register_duplicate_raises_error(self):
        registry = PluginRegistry()
        registry.register(MockPlugin())

        with pytest.raises(ValueError, match="already registered"):
            registry.register(MockPlugin())

    def test_register_invalid_plugin_raises_error(self):
        registry = PluginRegistry()

        with pytest.raises(ValueError, match="failed validation"):
            registry.register(BrokenPlugin())
        assert registry.list_games() == []

    def test_register_without_check(self):
        registry = PluginRegistry()
        registry.register(BrokenPlugin(), check=False)
        assert registry.get("broken-game").game_id == "broken-game"

    def test_get_nonexistent_plugin_raises_error(self):
        """Unknown games raise an engine error that is also a KeyError."""
        registry = PluginRegistry()

        with pytest.raises(UnknownGameError, match="Unknown game"):
            registry.get("nonexistent-game")
        with pytest.raises(KeyError):
            registry.get("nonexistent-game")

    def test_list_games_empty(self):
        assert PluginRegistry().list_games() == []

    def test_list_games(self):
        registry = PluginRegistry()
        registry.register(MockPlugin())

        games = registry.list_games()

        assert games == [{
            "game_id": "mock-game",
            "display_name": "Mock Game",
            "min_players": 2,
            "max_players": 4,
            "description": "A mock game for testing",
        }]


class TestValidatePlugin:
    def test_mock_plugin_is_valid(self):
        plugin = MockPlugin()
        assert isinstance(plugin, GamePlugin)
        assert validate_plugin(plugin) == []

    def test_missing_attributes(self):
        class Nameless:
            pass

        errors = validate_plugin(Nameless())
        assert "Missing attribute: game_id" in errors

    def test_setup_failure_reported(self):
        errors = validate_plugin(BrokenPlugin())
        assert errors == ["create_initial_state failed: no board"]


class TestCreateRegistry:
    def test_bundles_yinsh(self):
        registry = create_registry()
        assert isinstance(registry.get("yinsh"), YinshPlugin)
        assert [g["game_id"] for g in registry.list_games()] == ["yinsh"]
