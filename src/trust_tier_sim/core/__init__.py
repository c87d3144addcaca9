"""Core engine: pure state transitions with zero framework dependencies.

- fixed_point.py: checked integer arithmetic
- reputation.py: Reputation Ledger records and updates
- performance.py: job performance -> rating
- tiers.py: Tier Classifier
- staking.py: Staking Controller
- ledger.py: account-keyed store (TrustLedger)
- layout.py: fixed-width record encoding
- prng.py: seeded generator for the simulator
"""
