from .navigator_controller import NavigatorController, OperationResult

__all__ = ["NavigatorController", "OperationResult"]
