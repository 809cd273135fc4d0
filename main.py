"""
Firebase Functions entry point.
All functions must be exported from this file for deployment.
"""

import logging
import os
from firebase_admin import initialize_app

from subscription_backend.config.env_loader import load_environment, validate_environment, is_emulator

load_environment()

# Set emulator environment variables if running in emulators
if is_emulator():
    if not os.getenv('FIRESTORE_EMULATOR_HOST'):
        os.environ['FIRESTORE_EMULATOR_HOST'] = 'localhost:8080'
    if not os.getenv('FIREBASE_AUTH_EMULATOR_HOST'):
        os.environ['FIREBASE_AUTH_EMULATOR_HOST'] = 'localhost:9099'

# Initialize Firebase Admin SDK
# The SDK picks up emulator hosts from the environment
try:
    import firebase_admin
    if not firebase_admin._apps:
        initialize_app()
except ValueError:
    # App already initialized (can happen in tests)
    pass

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

validate_environment()

# Import callable functions
from subscription_backend.brokers.callable.get_server_time import get_server_time
from subscription_backend.brokers.callable.check_subscription_expiry import check_subscription_expiry
from subscription_backend.brokers.callable.sign_up_with_referral import sign_up_with_referral
from subscription_backend.brokers.callable.generate_referral_code import generate_referral_code

# Import HTTPS functions
from subscription_backend.brokers.https.revenuecat_webhook import revenuecat_webhook

# Import scheduled functions
from subscription_backend.brokers.scheduled.scheduled_expiry_check import scheduled_expiry_check

# Export all functions for Firebase deployment
__all__ = [
    # Callable functions
    'get_server_time',
    'check_subscription_expiry',
    'sign_up_with_referral',
    'generate_referral_code',

    # HTTPS functions
    'revenuecat_webhook',

    # Scheduled functions
    'scheduled_expiry_check',
]

logger.info("Firebase Functions initialized successfully")
