from .dispatcher import DispatchState, DispatchTrace, RequestDispatcher, WalletSession

__all__ = ["DispatchState", "DispatchTrace", "RequestDispatcher", "WalletSession"]
