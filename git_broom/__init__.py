"""git-broom: sweep away local git branches that are already merged."""

from git_broom.__version__ import __version__
from git_broom.config import Config
from git_broom.core import Broom
from git_broom.models import BranchInfo, BranchStatus

__all__ = ["__version__", "Broom", "BranchInfo", "BranchStatus", "Config"]
