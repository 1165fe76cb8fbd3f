"""
connectfour.interfaces - User interfaces for Connect Four

Presentation layers that read moves from a person and draw the board. They
only talk to the engine through create_game, drop_piece, current_player and
game_state.
"""

# Don't import anything here to avoid circular imports
__all__ = []
