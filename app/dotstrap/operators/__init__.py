"""Package operators for executing installation actions.

This module provides the APT operator used by the package steps.
"""

from dotstrap.operators.apt import AptOperator

__all__ = ["AptOperator"]
