"""
Tests for the temporary effect registry.
"""

from ..engine_core.temporary_effects import TemporaryEffectRegistry
from ..games.mandat.cards import ANGELA_MERKEL, LOBBYISMUS, MEDIA_BLACKOUT


class TestRegister:
    """Tests for registering effects."""

    def test_register_starts_this_round(self, three_player_state):
        state, effect = TemporaryEffectRegistry.register(
            three_player_state, "block-events", ANGELA_MERKEL, "p1", duration=2,
        )

        assert effect.start_round == 2
        assert effect.end_round == 4
        assert effect.source_card_id == ANGELA_MERKEL.id
        assert state.temporary_effects == [effect]
        assert three_player_state.temporary_effects == []

    def test_ids_are_unique(self, three_player_state):
        state, first = TemporaryEffectRegistry.register(
            three_player_state, "extra-draw", LOBBYISMUS, "p1", value=1,
        )
        state, second = TemporaryEffectRegistry.register(state, "extra-draw", LOBBYISMUS, "p2", value=1)

        assert first.effect_id == "effect-1"
        assert second.effect_id == "effect-2"

    def test_ids_not_reused_after_consume(self, three_player_state):
        state, first = TemporaryEffectRegistry.register(
            three_player_state, "block-next-special", MEDIA_BLACKOUT, "p1",
        )
        state = TemporaryEffectRegistry.consume(state, first.effect_id)
        state, second = TemporaryEffectRegistry.register(
            state, "block-next-special", MEDIA_BLACKOUT, "p1",
        )

        assert second.effect_id != first.effect_id


class TestActiveWindow:
    """Tests for the active window and sweeping."""

    def test_active_window(self, three_player_state):
        state, _ = TemporaryEffectRegistry.register(
            three_player_state, "block-events", ANGELA_MERKEL, "p1", duration=2,
        )

        assert not TemporaryEffectRegistry.active(state, round_number=1)
        assert TemporaryEffectRegistry.active(state, round_number=2)
        assert TemporaryEffectRegistry.active(state, round_number=3)
        assert not TemporaryEffectRegistry.active(state, round_number=4)

    def test_filter_by_type(self, three_player_state):
        state, _ = TemporaryEffectRegistry.register(
            three_player_state, "block-events", ANGELA_MERKEL, "p1",
        )
        state, _ = TemporaryEffectRegistry.register(state, "extra-draw", LOBBYISMUS, "p2", value=1)

        assert len(TemporaryEffectRegistry.active(state)) == 2
        assert [e.effect_type for e in TemporaryEffectRegistry.active(state, "extra-draw")] == [
            "extra-draw",
        ]
        assert not TemporaryEffectRegistry.has_active(state, "block-specials")

    def test_sweep_expired(self, three_player_state):
        state, short = TemporaryEffectRegistry.register(
            three_player_state, "block-events", ANGELA_MERKEL, "p1", duration=1,
        )
        state, long = TemporaryEffectRegistry.register(
            state, "block-specials", ANGELA_MERKEL, "p1", duration=3,
        )

        swept = TemporaryEffectRegistry.sweep_expired(state._copy_with(round=3))

        assert swept.temporary_effects == [long]

    def test_sweep_with_nothing_expired_returns_same_state(self, three_player_state):
        state, _ = TemporaryEffectRegistry.register(
            three_player_state, "block-events", ANGELA_MERKEL, "p1",
        )
        assert TemporaryEffectRegistry.sweep_expired(state) is state
