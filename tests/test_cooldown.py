"""
Tests for the global cooldown gate.
"""

import threading

from pastabot.core.cooldown import CooldownState, GlobalCooldown


class TestGlobalCooldown:
    def test_ready_before_first_use(self, clock):
        cooldown = GlobalCooldown(15, clock=clock)

        assert cooldown.can_use() is True
        assert cooldown.state is CooldownState.READY
        assert cooldown.remaining() == 0

    def test_cooling_after_use(self, clock):
        cooldown = GlobalCooldown(15, clock=clock)
        cooldown.use()

        clock.advance(14.9)
        assert cooldown.can_use() is False
        assert cooldown.state is CooldownState.COOLING
        assert cooldown.remaining() > 0

    def test_ready_once_duration_elapsed(self, clock):
        cooldown = GlobalCooldown(15, clock=clock)
        cooldown.use()

        clock.advance(15)
        assert cooldown.can_use() is True

    def test_can_use_does_not_mutate(self, clock):
        cooldown = GlobalCooldown(10, clock=clock)
        cooldown.use()
        clock.advance(4)

        for _ in range(5):
            cooldown.can_use()

        assert cooldown.remaining() == 6

    def test_repeated_use_moves_deadline_forward(self, clock):
        cooldown = GlobalCooldown(10, clock=clock)
        cooldown.use()
        clock.advance(8)
        cooldown.use()
        clock.advance(8)

        assert cooldown.can_use() is False
        assert cooldown.remaining() == 2

    def test_last_used_never_moves_backwards(self, clock):
        cooldown = GlobalCooldown(10, clock=clock)
        cooldown.use()
        clock.advance(-5)
        cooldown.use()
        clock.advance(10)

        assert cooldown.can_use() is False
        assert cooldown.remaining() == 5

    def test_zero_duration_is_always_ready(self, clock):
        cooldown = GlobalCooldown(0, clock=clock)
        cooldown.use()

        assert cooldown.can_use() is True

    def test_negative_duration_is_clamped(self, clock):
        assert GlobalCooldown(-3, clock=clock).duration == 0

    def test_concurrent_use_from_threads(self):
        cooldown = GlobalCooldown(60)
        threads = [threading.Thread(target=cooldown.use) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert cooldown.can_use() is False
