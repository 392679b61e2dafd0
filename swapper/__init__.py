"""UniswapV3 single-swap runner."""

from swapper.config import SwapConfig, TransactionPolicy
from swapper.orchestrator import SwapOrchestrator, SwapOutcome, SwapState

__version__ = "0.1.0"
__all__ = [
    "SwapConfig",
    "TransactionPolicy",
    "SwapOrchestrator",
    "SwapOutcome",
    "SwapState",
    "__version__",
]
