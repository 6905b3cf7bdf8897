from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from yinsh_engine.engine.errors import UnknownGameError
from yinsh_engine.engine.validation import validate_plugin

if TYPE_CHECKING:
    from yinsh_engine.engine.protocol import GamePlugin

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Game plugins available to sessions, keyed by game_id."""

    def __init__(self) -> None:
        self._plugins: dict[str, GamePlugin] = {}

    def register(self, plugin: GamePlugin, check: bool = True) -> None:
        """Add a plugin. With check=True the plugin must pass validate_plugin()."""
        game_id = plugin.game_id
        if game_id in self._plugins:
            raise ValueError(f"Game '{game_id}' already registered")
        if check:
            errors = validate_plugin(plugin)
            if errors:
                raise ValueError(f"Plugin '{game_id}' failed validation: {errors}")
        self._plugins[game_id] = plugin
        logger.info(f"Registered game plugin {game_id}")

    def get(self, game_id: str) -> GamePlugin:
        if game_id not in self._plugins:
            raise UnknownGameError(f"Unknown game: {game_id}")
        return self._plugins[game_id]

    def list_games(self) -> list[dict]:
        return [
            {
                "game_id": p.game_id,
                "display_name": p.display_name,
                "min_players": p.min_players,
                "max_players": p.max_players,
                "description": p.description,
            }
            for p in self._plugins.values()
        ]
