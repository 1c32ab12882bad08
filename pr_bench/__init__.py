"""Benchmark a pull request against its target branch in CI."""
