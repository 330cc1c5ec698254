"""Services for git-broom."""

from .branch_status_service import BranchStatusService
from .display_service import DisplayService
from .fast_forward_service import FastForwardService

__all__ = ["BranchStatusService", "DisplayService", "FastForwardService"]
