"""
Tests for RateLimiterManager implementation.

Covers rate limiter registration, queue mapping, unthrottled queues,
configuration parsing, permit refunds and cleanup.
"""

import asyncio
import unittest
from unittest.mock import AsyncMock, patch

from .interface import RateLimiterInterface
from .manager import RateLimiterManager
from .token_bucket import RatePolicy, TokenBucketRateLimiter


class MockRateLimiter(RateLimiterInterface):
    """Mock rate limiter for testing."""

    def __init__(self):
        self.initialized = False
        self.destroyed = False
        self.appliedLimits = []
        self.releasedLimits = []

    async def initialize(self):
        self.initialized = True

    async def destroy(self):
        self.destroyed = True

    async def applyLimit(self, queue="default"):
        self.appliedLimits.append(queue)

    def getStats(self, queue="default"):
        return {"maxRequests": 10, "windowSeconds": 60, "utilizationPercent": 0.0}

    async def release(self, queue="default"):
        self.releasedLimits.append(queue)

    def listQueues(self):
        return sorted(set(self.appliedLimits))


class TestRateLimiterManager(unittest.IsolatedAsyncioTestCase):
    """Test cases for RateLimiterManager functionality."""

    async def asyncSetUp(self):
        self.manager = RateLimiterManager()
        self.mockLimiter1 = MockRateLimiter()
        self.mockLimiter2 = MockRateLimiter()

    async def asyncTearDown(self):
        await self.manager.destroy()

    def testManagersAreIndependent(self):
        """Test every manager keeps its own registry."""
        other = RateLimiterManager()
        self.manager.registerRateLimiter("geocoding", self.mockLimiter1)

        self.assertIsNot(self.manager, other)
        self.assertEqual(other.listRateLimiters(), [])

    def testRegisterDuplicateLimiter(self):
        """Test error when registering duplicate limiter name."""
        self.manager.registerRateLimiter("duplicate", self.mockLimiter1)

        with self.assertRaises(ValueError) as context:
            self.manager.registerRateLimiter("duplicate", self.mockLimiter2)

        self.assertIn("already registered", str(context.exception))

    def testBindQueueToNonExistentLimiter(self):
        """Test error when binding queue to non-existent limiter."""
        with self.assertRaises(ValueError) as context:
            self.manager.bindQueue("geocoding", "nonexistent")

        self.assertIn("not registered", str(context.exception))

    async def testApplyLimitWithMapping(self):
        """Test applyLimit routes to correct limiter based on mapping."""
        self.manager.registerRateLimiter("limiter1", self.mockLimiter1)
        self.manager.registerRateLimiter("limiter2", self.mockLimiter2)
        self.manager.bindQueue("directions", "limiter1")

        await self.manager.applyLimit("directions")

        self.assertEqual(self.mockLimiter1.appliedLimits, ["directions"])
        self.assertEqual(self.mockLimiter2.appliedLimits, [])

    async def testUnboundQueueIsUnthrottled(self):
        """Test queues without a binding return immediately."""
        self.manager.registerRateLimiter("limiter1", self.mockLimiter1)

        await self.manager.applyLimit("elevation")

        self.assertEqual(self.mockLimiter1.appliedLimits, [])
        self.assertFalse(self.manager.isThrottled("elevation"))

    async def testApplyLimitWithNothingRegistered(self):
        """Test an empty manager throttles nothing."""
        await self.manager.applyLimit("geocoding")
        await self.manager.applyLimits("all", "geocoding")

    async def testApplyLimitsInOrder(self):
        """Test applyLimits visits queues in the given order."""
        self.manager.registerRateLimiter("shared", self.mockLimiter1)
        self.manager.bindQueue("all", "shared")
        self.manager.bindQueue("places", "shared")

        await self.manager.applyLimits("all", "places")

        self.assertEqual(self.mockLimiter1.appliedLimits, ["all", "places"])

    async def testGetStats(self):
        """Test getStats routes to the bound limiter."""
        self.manager.registerRateLimiter("limiter1", self.mockLimiter1)
        self.manager.bindQueue("time_zone", "limiter1")

        self.assertEqual(self.manager.getStats("time_zone")["maxRequests"], 10)

    def testGetStatsUnboundQueue(self):
        """Test getStats rejects unthrottled queues."""
        with self.assertRaises(ValueError) as context:
            self.manager.getStats("time_zone")

        self.assertIn("not bound", str(context.exception))

    async def testInitializeCallsEveryLimiter(self):
        """Test initialize reaches every registered limiter."""
        self.manager.registerRateLimiter("limiter1", self.mockLimiter1)
        self.manager.registerRateLimiter("limiter2", self.mockLimiter2)

        await self.manager.initialize()

        self.assertTrue(self.mockLimiter1.initialized)
        self.assertTrue(self.mockLimiter2.initialized)

    def testFromPolicies(self):
        """Test fromPolicies creates one token bucket per queue."""
        manager = RateLimiterManager.fromPolicies(
            {
                "all": RatePolicy(requests=100, perSeconds=1),
                "geocoding": RatePolicy(requests=50, perSeconds=1),
            }
        )

        self.assertEqual(sorted(manager.listRateLimiters()), ["all", "geocoding"])
        self.assertEqual(manager.getQueueMappings(), {"all": "all", "geocoding": "geocoding"})
        self.assertIsInstance(manager._rateLimiters["geocoding"], TokenBucketRateLimiter)

    def testParseConfig(self):
        """Test TOML style configuration is converted into policies."""
        policies = RateLimiterManager.parseConfig(
            {"queues": {"directions": {"requests": 10, "per-seconds": 2}}}  # type: ignore[typeddict-item]
        )

        self.assertEqual(policies, {"directions": RatePolicy(requests=10, perSeconds=2.0)})

    def testParseConfigMissingKey(self):
        """Test configuration without per-seconds is rejected."""
        with self.assertRaises(ValueError) as context:
            RateLimiterManager.parseConfig({"queues": {"directions": {"requests": 10}}})  # type: ignore[typeddict-item]

        self.assertIn("per-seconds", str(context.exception))

    async def testDestroy(self):
        """Test manager destruction and cleanup."""
        self.manager.registerRateLimiter("limiter1", self.mockLimiter1)
        self.manager.bindQueue("geocoding", "limiter1")

        await self.manager.destroy()

        self.assertTrue(self.mockLimiter1.destroyed)
        self.assertEqual(self.manager.listRateLimiters(), [])
        self.assertEqual(self.manager.getQueueMappings(), {})

    async def testDestroyWithError(self):
        """Test destruction handles errors gracefully."""
        errorLimiter = MockRateLimiter()
        errorLimiter.destroy = AsyncMock(side_effect=Exception("Destroy error"))
        self.manager.registerRateLimiter("error_limiter", errorLimiter)

        with patch("lib.rate_limiter.manager.logger") as mockLogger:
            await self.manager.destroy()
            mockLogger.error.assert_called()

        self.assertEqual(self.manager.listRateLimiters(), [])


class TestRateLimiterManagerTokenBuckets(unittest.IsolatedAsyncioTestCase):
    """Manager driving real token buckets on a fake clock."""

    async def testGlobalAndGroupBucketsBothApply(self):
        """Test the tighter of the global and group limits wins."""
        now = [0.0]
        sleeps = []

        async def fakeSleep(seconds: float) -> None:
            sleeps.append(seconds)
            now[0] += seconds
            await asyncio.sleep(0)

        manager = RateLimiterManager.fromPolicies(
            {
                "all": RatePolicy(requests=1, perSeconds=1),
                "geocoding": RatePolicy(requests=10, perSeconds=1),
            },
            clock=lambda: now[0],
            sleep=fakeSleep,
        )
        await manager.initialize()

        for _ in range(3):
            await manager.applyLimits("all", "geocoding")

        self.assertEqual(len(sleeps), 2)
        self.assertAlmostEqual(now[0], 2.0)
        await manager.destroy()

    async def testCancelledGroupWaitRefundsGlobalToken(self):
        """Test a caller cancelled on the group bucket gives its global token back."""
        blocked = asyncio.Event()

        async def blockingSleep(seconds: float) -> None:
            blocked.set()
            await asyncio.Event().wait()

        manager = RateLimiterManager.fromPolicies(
            {
                "all": RatePolicy(requests=2, perSeconds=100),
                "directions": RatePolicy(requests=1, perSeconds=100),
            },
            clock=lambda: 0.0,
            sleep=blockingSleep,
        )
        await manager.initialize()

        await manager.applyLimits("all", "directions")
        self.assertEqual(manager.getStats("all")["tokensAvailable"], 1.0)

        task = asyncio.create_task(manager.applyLimits("all", "directions"))
        await blocked.wait()
        task.cancel()
        with self.assertRaises(asyncio.CancelledError):
            await task

        self.assertEqual(manager.getStats("all")["tokensAvailable"], 1.0)
        self.assertEqual(manager.getStats("directions")["tokensAvailable"], 0.0)
        await manager.destroy()

    async def testReleaseRoutesToBoundLimiter(self):
        """Test release reaches the bound limiter and ignores unbound queues."""
        manager = RateLimiterManager()
        limiter = MockRateLimiter()
        manager.registerRateLimiter("limiter", limiter)
        manager.bindQueue("all", "limiter")

        await manager.release("all")
        await manager.release("elevation")

        self.assertEqual(limiter.releasedLimits, ["all"])
        await manager.destroy()


if __name__ == "__main__":
    unittest.main()
