"""End-to-end scenarios across several providers and traders."""

import pytest

from simpleswap.errors import DeadlineExceeded
from simpleswap.models.events import LiquidityAdded, LiquidityRemoved, Swap
from tests.helpers import ALICE, BOB, CAROL, DEADLINE, ONE, TOKEN_A, TOKEN_B, fund, seed_pool


class TestPoolLifecycle:
    def test_providers_share_swap_proceeds(self, pool):
        """Two providers enter, a trader swaps both ways, both providers exit."""
        alice_minted = seed_pool(pool, 1000 * ONE, 1000 * ONE)
        bob_minted = seed_pool(pool, 500 * ONE, 500 * ONE, provider=BOB)
        assert bob_minted * 2 == alice_minted

        fund(pool, CAROL, 100 * ONE, 100 * ONE)
        k = pool.state.product
        for _ in range(5):
            pool.swap_exact_tokens_for_tokens(10 * ONE, 0, [TOKEN_A, TOKEN_B], CAROL, DEADLINE, sender=CAROL)
            pool.swap_exact_tokens_for_tokens(10 * ONE, 0, [TOKEN_B, TOKEN_A], CAROL, DEADLINE, sender=CAROL)
            assert pool.state.product >= k
            k = pool.state.product

        # Rounding leaves the trader slightly worse off, never better
        assert pool.token_a.balance_of(CAROL) + pool.token_b.balance_of(CAROL) <= 200 * ONE

        out_bob = pool.remove_liquidity(TOKEN_A, TOKEN_B, bob_minted, 0, 0, BOB, DEADLINE, sender=BOB)
        out_alice = pool.remove_liquidity(TOKEN_A, TOKEN_B, alice_minted, 0, 0, ALICE, DEADLINE, sender=ALICE)

        assert pool.get_reserves() == (0, 0)
        assert pool.total_supply() == 0
        assert pool.token_a.balance_of(pool.address) == 0
        assert pool.token_b.balance_of(pool.address) == 0
        assert out_alice[0] + out_alice[1] >= 2000 * ONE
        assert out_bob[0] + out_bob[1] >= 1000 * ONE

        assert len(pool.events.of_type(LiquidityAdded)) == 2
        assert len(pool.events.of_type(Swap)) == 10
        assert len(pool.events.of_type(LiquidityRemoved)) == 2

    def test_pool_can_be_reseeded_after_draining(self, pool):
        minted = seed_pool(pool, 200, 50)
        pool.remove_liquidity(TOKEN_A, TOKEN_B, minted, 0, 0, ALICE, DEADLINE, sender=ALICE)

        assert seed_pool(pool, 400, 100, provider=BOB) == 200
        assert pool.get_price(TOKEN_B, TOKEN_A) == 4 * 10**18

    def test_reserves_track_ledger_balances(self, pool):
        seed_pool(pool, 300, 700)
        fund(pool, BOB, 50, 50)
        pool.swap_exact_tokens_for_tokens(50, 0, [TOKEN_B, TOKEN_A], BOB, DEADLINE, sender=BOB)
        pool.remove_liquidity(TOKEN_A, TOKEN_B, 100, 0, 0, CAROL, DEADLINE, sender=ALICE)

        assert pool.get_reserves() == (
            pool.token_a.balance_of(pool.address),
            pool.token_b.balance_of(pool.address),
        )
        assert pool.total_supply() == pool.claim_token.total_supply()

    def test_deadline_follows_clock(self, pool, clock):
        seed_pool(pool, 100, 100)
        fund(pool, BOB, 10, 0)
        clock.set(DEADLINE + 1)

        with pytest.raises(DeadlineExceeded, match="Deadline exceeded"):
            pool.swap_exact_tokens_for_tokens(10, 0, [TOKEN_A, TOKEN_B], BOB, DEADLINE, sender=BOB)
        assert pool.get_reserves() == (100, 100)
