from .status import FalseCommand, TrueCommand

__all__ = ["FalseCommand", "TrueCommand"]
