from __future__ import annotations

import logging

from yinsh_engine.config import settings
from yinsh_engine.engine.models import GameConfig, Player
from yinsh_engine.engine.registry import PluginRegistry
from yinsh_engine.engine.session import GameSession
from yinsh_engine.games.yinsh.plugin import YinshPlugin

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or settings.log_level).upper())


def create_registry() -> PluginRegistry:
    """Registry holding every bundled game."""
    registry = PluginRegistry()
    registry.register(YinshPlugin())
    logger.info(f"Loaded {len(registry.list_games())} game plugins")
    return registry


def start_match(
    registry: PluginRegistry,
    game_id: str,
    players: list[Player],
    options: dict | None = None,
) -> GameSession:
    plugin = registry.get(game_id)
    return GameSession.create(plugin, players, GameConfig(options=options or {}))
