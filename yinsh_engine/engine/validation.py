from __future__ import annotations

from yinsh_engine.engine.models import GameConfig, Phase, Player, PlayerId
from yinsh_engine.engine.protocol import GamePlugin

REQUIRED_ATTRIBUTES = ("game_id", "display_name", "min_players", "max_players")


def validate_plugin(plugin: GamePlugin) -> list[str]:
    """Smoke-test a plugin before it is registered. Returns errors (empty = OK).

    Sets up a match with the minimum number of players and checks the
    phase, the actions on offer and the views it produces.
    """
    missing = [attr for attr in REQUIRED_ATTRIBUTES if not hasattr(plugin, attr)]
    if missing:
        return [f"Missing attribute: {attr}" for attr in missing]
    if not isinstance(plugin, GamePlugin):
        return ["Plugin does not implement the GamePlugin protocol"]

    errors: list[str] = []
    players = [
        Player(player_id=PlayerId(f"test-{seat}"), display_name=f"Test {seat}", seat_index=seat)
        for seat in range(plugin.min_players)
    ]
    config = GameConfig()

    try:
        if plugin.validate_config(config.options):
            errors.append("Default options are rejected by validate_config")

        game_data, phase, _ = plugin.create_initial_state(players, config)
        if not isinstance(game_data, dict):
            errors.append("create_initial_state must return dict as game_data")
        if not isinstance(phase, Phase):
            errors.append("create_initial_state must return Phase as second element")
            return errors
        if not phase.auto_resolve and not phase.expected_actions:
            errors.append("First phase is not auto_resolve but has no expected_actions")

        for p in players:
            for action in plugin.get_valid_actions(game_data, phase, p.player_id):
                if "action_type" not in action:
                    errors.append(f"Valid action without action_type: {action}")
                    break
            plugin.get_player_view(game_data, phase, p.player_id, players)
        plugin.get_player_view(game_data, phase, None, players)

        again, _, _ = plugin.create_initial_state(players, config)
        if again != game_data:
            errors.append("create_initial_state is not deterministic")
    except Exception as e:
        errors.append(f"create_initial_state failed: {e}")

    return errors
