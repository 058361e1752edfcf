from typing import Optional

from schoolplacement.core.errors import ErrorCode, Result
from schoolplacement.core.ministry import MinistryRegistry
from schoolplacement.logger import get_logger


class AuthorizationGate:
    """Checks callers against the registered ministry authority.

    Both checks return None when the request may proceed, or the failure
    Result to hand back to the caller.
    """

    def __init__(self, registry: MinistryRegistry):
        self.registry = registry

    def check_initialized(self) -> Optional[Result]:
        if not self.registry.is_initialized():
            return Result.fail(ErrorCode.NOT_INITIALIZED, "Ministry has not been initialized")
        return None

    def check(self, caller: str) -> Optional[Result]:
        if self.registry.is_authority(caller):
            return None
        get_logger().warning("Ministry action denied", caller=caller)
        return Result.fail(ErrorCode.UNAUTHORIZED, "Action reserved for the ministry")
