"""
SESSIONGUARD

Machine à états du cycle de vie des sessions d'authentification.
"""

__version__ = "0.1.0"
