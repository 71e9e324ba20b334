from tvgate.plugins.zee5.handlers import Zee5Provider

__all__ = ['Zee5Provider']
