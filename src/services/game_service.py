"""Orchestration of the message flow: decode the inbound game, apply a move, encode it again (and remember finished games)."""

import logging
from typing import Optional

from src.api.models import (
    CellView,
    GameResponse,
    HistoryRequest,
    HistoryResponse,
    InboundMessageRequest,
    MoveRequest,
    NewGameRequest,
    OpenGameRequest,
    WireField,
)
from src.core.config import Settings, get_settings
from src.core.exceptions import DecodeError, IllegalMoveError, InvalidRequestError
from src.core.models import GameModel
from src.core.shared_types import Status
from src.db.repository import HistoryRepository
from src.tictactoe.codec import WireFields, from_query_string, to_query_string
from src.tictactoe.game import Game
from src.tictactoe.history import GamesHistory
from src.tictactoe.participant import DEFAULT_PALETTE, Participant

logger = logging.getLogger(__name__)


class TicTacToeService:
    """Orchestration of layers for a game that travels inside messages."""

    def __init__(self, repository: HistoryRepository, settings: Optional[Settings] = None) -> None:
        self.repo = repository
        self.settings = settings if settings is not None else get_settings()

    # -- transport flow --
    def new_game(self, request: NewGameRequest) -> GameResponse:
        """Fresh board between the local participant and the remote ones."""
        size = request.size or self.settings.default_board_size
        if request.required_run is not None and request.required_run > size:
            raise InvalidRequestError(
                f"Required run {request.required_run} does not fit on a board of size {size}."
            )

        # colors are given in wire order: remotes first, local last
        colors = request.colors or [
            *(DEFAULT_PALETTE[(i + 1) % len(DEFAULT_PALETTE)] for i in range(len(request.remote_ids))),
            DEFAULT_PALETTE[0],
        ]
        remotes = [Participant(pid, color) for pid, color in zip(request.remote_ids, colors)]
        local = Participant(request.local_id, colors[-1])

        game = Game.new_game(local, remotes, size=size, required_run=request.required_run)
        logger.info(
            "New %dx%d game for %s against %s", size, size, local.id, [r.id for r in remotes]
        )
        return self._create_game_response(game)

    def open_game(self, request: OpenGameRequest) -> GameResponse:
        """Rebuild the game carried by an inbound message, as seen by the viewer."""
        return self._create_game_response(self._decode(request))

    def open_or_new(self, request: OpenGameRequest, remote_ids: list[str]) -> GameResponse:
        """Like open_game, but an unusable message starts a fresh game instead."""
        try:
            return self.open_game(request)
        except DecodeError:
            logger.info("Starting a fresh game for %s instead", request.viewer_id)
            return self.new_game(NewGameRequest(local_id=request.viewer_id, remote_ids=remote_ids))

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt and return the state to send on."""
        game = self._decode(request)

        # coordinates come from outside, so they are checked here rather than left to the board
        if not (request.row < game.size and request.col < game.size):
            raise InvalidRequestError(
                f"({request.row}, {request.col}) is not on a board of size {game.size}."
            )

        try:
            game.apply_move(request.row, request.col)
        except IllegalMoveError as e:
            logger.info("Move (%d, %d) by %s rejected: %s", request.row, request.col, game.local.id, e)
            raise

        logger.info("%s played (%d, %d), status: %s", game.local.id, request.row, request.col, game.status)
        if game.is_finished:
            self._remember(game)
        return self._create_game_response(game)

    def history(self, request: HistoryRequest) -> HistoryResponse:
        history = GamesHistory.load(self.repo, request.owner_id, self.settings.history_size)
        return HistoryResponse(
            owner_id=request.owner_id,
            games=[self._create_game_response(game) for game in history],
        )

    # -- Internal helpers --
    def _decode(self, request: InboundMessageRequest) -> Game:
        try:
            fields: WireFields = (
                [(field.name, field.value) for field in request.fields]
                if request.fields is not None
                else from_query_string(request.message_url or "")
            )
            return Game.from_model(GameModel(fields=fields, viewer_id=request.viewer_id))
        except DecodeError as e:
            logger.warning("Unusable game payload for %s: %s", request.viewer_id, e)
            raise

    def _remember(self, game: Game) -> None:
        """Finished games go to the local participant's history."""
        history = GamesHistory.load(self.repo, game.local.id, self.settings.history_size)
        history.append(game)
        history.save(self.repo)

    def _create_game_response(self, game: Game) -> GameResponse:
        model = game.to_model()
        return GameResponse(
            fields=[WireField(name=name, value=value) for name, value in model.fields],
            message_url=to_query_string(model.fields),
            size=game.size,
            required_run=game.required_run,
            local_id=game.local.id,
            remote_ids=[remote.id for remote in game.remotes],
            status=Status(model.status),
            winner_id=model.winner_id,
            cells=[
                CellView(
                    row=row,
                    col=col,
                    owner_id=cell.owner_id,
                    color=game.participant(cell.owner_id).color if cell.owner_id is not None else None,
                )
                for row, col, cell in game.cells()
            ],
        )
