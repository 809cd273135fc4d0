"""Server time callable function."""

from firebase_functions import https_fn, options
from subscription_backend.apis.Db import Db
from subscription_backend.models.function_types import ServerTimeResponse
from subscription_backend.util import time_utils
from subscription_backend.util.cors_response import cors_response_on_call
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


def handle_get_server_time() -> ServerTimeResponse:
    """Return the authoritative server clock as ISO-8601 and epoch millis."""
    current = Db.timestamp_now()
    return {
        "serverTime": time_utils.to_iso8601_z(current),
        "timestamp": time_utils.to_epoch_millis(current),
    }


@https_fn.on_call(
    cors=options.CorsOptions(cors_origins=["*"]),
    ingress=options.IngressSetting.ALLOW_ALL,
)
def get_server_time(req: https_fn.CallableRequest) -> ServerTimeResponse:
    """Get the server time so clients never trust their own clock.

    Args:
        req: Firebase callable request; no data or auth required

    Returns:
        ServerTimeResponse with serverTime and timestamp
    """
    options_response = cors_response_on_call(req.raw_request)
    if options_response:
        return options_response

    try:
        return handle_get_server_time()
    except Exception as e:
        logger.error(f"Failed to read server time: {e}")
        raise https_fn.HttpsError(
            https_fn.FunctionsErrorCode.INTERNAL,
            "Failed to get server time"
        )
