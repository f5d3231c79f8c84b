from .application import Application
from .menu import MenuChoice

__all__ = ['Application', 'MenuChoice']
