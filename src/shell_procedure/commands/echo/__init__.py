from .echo import EchoCommand, SayCommand

__all__ = ["EchoCommand", "SayCommand"]
