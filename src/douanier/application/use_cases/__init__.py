"""Application use cases."""

from douanier.application.use_cases.check_auth_status import CheckAuthStatus
from douanier.application.use_cases.initiate_authentication import (
    InitiateAuthentication,
)
from douanier.application.use_cases.logout import Logout
from douanier.application.use_cases.submit_transaction_signature import (
    SubmitTransactionSignature,
)
from douanier.application.use_cases.sweep_expired_sessions import (
    SweepExpiredSessions,
)

__all__ = [
    "InitiateAuthentication",
    "CheckAuthStatus",
    "SubmitTransactionSignature",
    "Logout",
    "SweepExpiredSessions",
]
