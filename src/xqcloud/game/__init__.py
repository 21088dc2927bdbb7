"""Game management layer — lifecycle controller, acquisition pipeline, rules.

Quick start::

    from xqcloud.game import GameController
    from xqcloud.oracle import CloudLibraryOracle, EngineApiOracle, QtHttpTransport

    transport = QtHttpTransport()
    ctrl = GameController(
        position,
        CloudLibraryOracle(transport),
        EngineApiOracle(transport),
        search=search,
    )
    ctrl.new_game()
"""

from xqcloud.game.acquisition import AcquiredMove, MoveAcquisitionPipeline
from xqcloud.game.controller import GameController, result_message
from xqcloud.game.interfaces import (
    AcquisitionPurpose,
    AcquisitionStage,
    GamePhase,
    IGameController,
)
from xqcloud.game.rules import Rules, TerminalReason, TerminalVerdict
from xqcloud.game.state import GameContext, GameEvents, GameState

__all__ = [
    # Interfaces
    "AcquisitionPurpose",
    "AcquisitionStage",
    "GamePhase",
    "IGameController",
    # Concrete
    "AcquiredMove",
    "GameContext",
    "GameController",
    "GameEvents",
    "GameState",
    "MoveAcquisitionPipeline",
    "Rules",
    "TerminalReason",
    "TerminalVerdict",
    "result_message",
]
