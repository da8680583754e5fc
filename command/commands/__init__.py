"""
Built-in chat commands.
"""
