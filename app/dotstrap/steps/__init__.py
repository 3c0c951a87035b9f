"""Provisioning steps.

Each step checks whether its target is already present and performs its
side effect only when it is not.
"""

from dotstrap.steps.base import Step, StepContext, StepError
from dotstrap.steps.clone import GitCloneStep, TpmStep
from dotstrap.steps.dotfiles import DotfilesStep
from dotstrap.steps.installers import NodeStep, OhMyZshStep, RustStep
from dotstrap.steps.neovim import NeovimBuildStep
from dotstrap.steps.packages import PackageStep, SystemUpdateStep
from dotstrap.steps.plan import build_plan

__all__ = [
    "DotfilesStep",
    "GitCloneStep",
    "NeovimBuildStep",
    "NodeStep",
    "OhMyZshStep",
    "PackageStep",
    "RustStep",
    "Step",
    "StepContext",
    "StepError",
    "SystemUpdateStep",
    "TpmStep",
    "build_plan",
]
