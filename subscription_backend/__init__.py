"""
Subscription backend - Firebase Functions for paid entitlements and referrals.

Keeps a user's Pro entitlement consistent with the billing provider, enforces
subscription expiry against the server clock, and lets new users redeem
referral codes for a trial while rewarding the referrer.

Architecture:
    - brokers/: callable, HTTPS and scheduled function adapters
    - services/: referral ledger, expiry evaluation, signup orchestration,
      expiry sweep, entitlement sync, referral code generation
    - apis/: Firestore (Db) and Firebase Authentication (Identity)
"""

__version__ = "1.0.0"
