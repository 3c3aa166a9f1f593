"""
lexbot - relay chat-room messages to a conversational backend.
"""

__version__ = "0.1.0"
__logo__ = "🤖"
