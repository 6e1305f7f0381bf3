"""
Contract tests package.

This package contains contract test mixins that all adapter implementations
must pass to ensure interface compliance.
"""

from tests.contracts.test_adapter_contract import AdapterContractMixin

__all__ = [
    "AdapterContractMixin",
]
