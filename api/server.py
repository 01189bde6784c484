"""
HTTP facade for the Rookie Draft Board

aiohttp.web application exposing the player store and the live draft session
as JSON under /api. Handlers stay thin: domain errors propagate to one error
middleware that maps exception classes to status codes.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from aiohttp import web

from constants import CSV_FILENAME
from exceptions import (
    APIException,
    DraftBoardException,
    DraftException,
    InvariantViolation,
    NotFoundError,
    ValidationException,
)
from models.base import DraftBoardBaseModel
from services.live_draft_service import LiveDraftService
from services.player_store import PlayerStore
from services.sleeper_service import SleeperService
from utils.decorators import logged_route
from utils.export import export_players_csv
from utils.logging import clear_context, get_contextual_logger
from utils.ordering import FilterOptions, SortOption, filter_and_sort_players

logger = logging.getLogger(f'{__name__}.DraftBoardServer')

STORE_KEY = web.AppKey("player_store", PlayerStore)
DRAFT_KEY = web.AppKey("live_draft", LiveDraftService)
SLEEPER_KEY = web.AppKey("sleeper_service", SleeperService)

# Most specific classes first
ERROR_STATUS = [
    (ValidationException, 400),
    (NotFoundError, 404),
    (InvariantViolation, 409),
    (DraftException, 409),
    (APIException, 502),
]


def status_for_exception(error: Exception) -> int:
    """HTTP status for a domain exception (500 for anything unmapped)."""
    for exc_class, status in ERROR_STATUS:
        if isinstance(error, exc_class):
            return status
    return 500


@web.middleware
async def error_middleware(request: web.Request, handler):
    """Convert domain exceptions into JSON error responses."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except DraftBoardException as e:
        status = status_for_exception(e)
        if status >= 500:
            logger.error(f"{request.method} {request.path} failed upstream: {e}")
        return web.json_response({'message': str(e)}, status=status)
    except Exception as e:
        logger.exception(f"Unhandled error in {request.method} {request.path}: {e}")
        return web.json_response({'message': 'Internal server error'}, status=500)
    finally:
        clear_context()


def parse_id(request: web.Request, name: str) -> int:
    """
    Integer path parameter.

    Raises:
        ValidationException: If the value is not an integer
    """
    raw = request.match_info.get(name, '')
    try:
        return int(raw)
    except ValueError:
        raise ValidationException(f"Invalid {name.replace('_', ' ')}: {raw!r}")


async def read_json(request: web.Request, default: Any = None) -> Any:
    """
    Request body as JSON (default when the body is empty).

    Raises:
        ValidationException: If the body is not valid JSON
    """
    if not request.can_read_body:
        return default
    text = await request.text()
    if not text.strip():
        return default
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationException(f"Request body is not valid JSON: {e.msg}")


def require_object(body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise ValidationException("Request body must be a JSON object")
    return body


def dump_list(key: str, items: List[DraftBoardBaseModel]) -> Dict[str, Any]:
    """Collection response: {'count': N, key: [...]}"""
    return {'count': len(items), key: [item.model_dump() for item in items]}


def query_options(request: web.Request) -> tuple:
    query = request.query
    filters = FilterOptions(
        position=query.get('position', 'all'),
        tier=query.get('tier', 'all'),
        search=query.get('search', '')
    )
    sort = SortOption(
        field=query.get('sort', 'rank'),
        direction=query.get('direction', 'asc')
    )
    return filters, sort


class PlayerRoutes:
    """Handlers for /api/players."""

    def __init__(self):
        self.logger = get_contextual_logger(f'{__name__}.PlayerRoutes')

    @logged_route("GET /api/players")
    async def list_players(self, request: web.Request) -> web.Response:
        filters, sort = query_options(request)
        store = request.app[STORE_KEY]
        players = filter_and_sort_players(store.list_players(), filters, sort)
        return web.json_response(dump_list('players', players))

    @logged_route("GET /api/players/{id}")
    async def get_player(self, request: web.Request) -> web.Response:
        player = request.app[STORE_KEY].get_player(parse_id(request, 'player_id'))
        return web.json_response(player.model_dump())

    @logged_route("POST /api/players")
    async def create_player(self, request: web.Request) -> web.Response:
        body = require_object(await read_json(request))
        player = request.app[STORE_KEY].create_player(body)
        return web.json_response(player.model_dump(), status=201)

    @logged_route("PATCH /api/players/{id}")
    async def update_player(self, request: web.Request) -> web.Response:
        player_id = parse_id(request, 'player_id')
        body = require_object(await read_json(request, default={}))
        player = request.app[STORE_KEY].update_player(player_id, body)
        return web.json_response(player.model_dump())

    @logged_route("DELETE /api/players/{id}")
    async def delete_player(self, request: web.Request) -> web.Response:
        request.app[STORE_KEY].delete_player(parse_id(request, 'player_id'))
        return web.Response(status=204)

    @logged_route("POST /api/players/reorder", log_params=False)
    async def reorder_players(self, request: web.Request) -> web.Response:
        body = await read_json(request)
        if isinstance(body, dict):
            body = body.get('players')
        if not isinstance(body, list):
            raise ValidationException("Reorder request must be a list of {id, order} objects")
        players = request.app[STORE_KEY].reorder_players(body)
        return web.json_response(dump_list('players', players))

    @logged_route("GET /api/players/export")
    async def export_players(self, request: web.Request) -> web.Response:
        csv_text = export_players_csv(request.app[STORE_KEY].list_players())
        return web.Response(
            text=csv_text,
            content_type='text/csv',
            headers={'Content-Disposition': f'attachment; filename="{CSV_FILENAME}"'}
        )


class DraftRoutes:
    """Handlers for /api/draft."""

    def __init__(self):
        self.logger = get_contextual_logger(f'{__name__}.DraftRoutes')

    @logged_route("GET /api/draft")
    async def get_state(self, request: web.Request) -> web.Response:
        return web.json_response(request.app[DRAFT_KEY].state())

    @logged_route("PUT /api/draft/settings")
    async def update_settings(self, request: web.Request) -> web.Response:
        body = require_object(await read_json(request, default={}))
        unknown = set(body) - {'team_count', 'round_count', 'mode'}
        if unknown:
            raise ValidationException(f"Unknown settings: {', '.join(sorted(unknown))}")
        for key in ('team_count', 'round_count'):
            if key in body and (not isinstance(body[key], int) or isinstance(body[key], bool)):
                raise ValidationException(f"{key} must be an integer")
        state = request.app[DRAFT_KEY].configure(
            team_count=body.get('team_count'),
            round_count=body.get('round_count'),
            mode=body.get('mode')
        )
        return web.json_response(state)

    @logged_route("GET /api/draft/board")
    async def get_board(self, request: web.Request) -> web.Response:
        rounds = request.app[DRAFT_KEY].draft_board()
        return web.json_response({'rounds': [r.to_dict() for r in rounds]})

    @logged_route("GET /api/draft/available")
    async def get_available(self, request: web.Request) -> web.Response:
        filters, sort = query_options(request)
        players = request.app[DRAFT_KEY].available_players(filters, sort)
        return web.json_response(dump_list('players', players))

    @logged_route("POST /api/draft/picks")
    async def draft_player(self, request: web.Request) -> web.Response:
        body = require_object(await read_json(request))
        player_id = body.get('player_id')
        if not isinstance(player_id, int) or isinstance(player_id, bool):
            raise ValidationException("player_id must be an integer")
        draft = request.app[DRAFT_KEY]
        record = draft.draft_player(player_id)
        return web.json_response({'pick': record.model_dump(), 'state': draft.state()}, status=201)

    @logged_route("DELETE /api/draft/picks/last")
    async def undo_pick(self, request: web.Request) -> web.Response:
        draft = request.app[DRAFT_KEY]
        record = draft.undo_last_pick()
        return web.json_response({'pick': record.model_dump(), 'state': draft.state()})

    @logged_route("GET /api/draft/teams")
    async def list_teams(self, request: web.Request) -> web.Response:
        return web.json_response(dump_list('teams', request.app[DRAFT_KEY].teams))

    @logged_route("PATCH /api/draft/teams/{id}")
    async def rename_team(self, request: web.Request) -> web.Response:
        team_id = parse_id(request, 'team_id')
        body = require_object(await read_json(request, default={}))
        name = body.get('name')
        if not isinstance(name, str):
            raise ValidationException("name must be a string")
        team = request.app[DRAFT_KEY].rename_team(team_id, name)
        return web.json_response(team.model_dump())

    @logged_route("GET /api/draft/teams/{id}/picks")
    async def team_picks(self, request: web.Request) -> web.Response:
        picks = request.app[DRAFT_KEY].team_picks(parse_id(request, 'team_id'))
        return web.json_response(dump_list('picks', picks))

    @logged_route("GET /api/draft/teams/{id}/owned-picks")
    async def team_owned_picks(self, request: web.Request) -> web.Response:
        picks = request.app[DRAFT_KEY].team_owned_picks(parse_id(request, 'team_id'))
        return web.json_response(dump_list('picks', picks))

    @logged_route("POST /api/draft/trades")
    async def trade_picks(self, request: web.Request) -> web.Response:
        body = require_object(await read_json(request))
        try:
            from_team = int(body['from_team_id'])
            to_team = int(body['to_team_id'])
            from_picks = [int(p) for p in body.get('from_picks') or []]
            to_picks = [int(p) for p in body.get('to_picks') or []]
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationException(f"Invalid trade request: {e}")

        draft = request.app[DRAFT_KEY]
        trade = draft.trade_picks(from_team, to_team, from_picks, to_picks)
        return web.json_response({'trade': trade.model_dump(), 'traded_picks': draft.trade_ledger.traded_picks})

    @logged_route("POST /api/draft/import/sleeper")
    async def import_sleeper(self, request: web.Request) -> web.Response:
        body = require_object(await read_json(request, default={}))
        league_id = body.get('league_id')
        if league_id is not None and not isinstance(league_id, str):
            raise ValidationException("league_id must be a string")

        league_import = await request.app[SLEEPER_KEY].build_league_import(league_id)
        state = request.app[DRAFT_KEY].load_league(league_import)
        return web.json_response({'league_name': league_import.league_name, 'state': state})


def setup_routes(app: web.Application) -> None:
    players = PlayerRoutes()
    draft = DraftRoutes()

    # /players/export and /players/reorder are registered before /players/{player_id}
    app.router.add_get('/api/players', players.list_players)
    app.router.add_post('/api/players', players.create_player)
    app.router.add_get('/api/players/export', players.export_players)
    app.router.add_post('/api/players/reorder', players.reorder_players)
    app.router.add_get('/api/players/{player_id}', players.get_player)
    app.router.add_patch('/api/players/{player_id}', players.update_player)
    app.router.add_delete('/api/players/{player_id}', players.delete_player)

    app.router.add_get('/api/draft', draft.get_state)
    app.router.add_put('/api/draft/settings', draft.update_settings)
    app.router.add_get('/api/draft/board', draft.get_board)
    app.router.add_get('/api/draft/available', draft.get_available)
    app.router.add_post('/api/draft/picks', draft.draft_player)
    app.router.add_delete('/api/draft/picks/last', draft.undo_pick)
    app.router.add_get('/api/draft/teams', draft.list_teams)
    app.router.add_patch('/api/draft/teams/{team_id}', draft.rename_team)
    app.router.add_get('/api/draft/teams/{team_id}/picks', draft.team_picks)
    app.router.add_get('/api/draft/teams/{team_id}/owned-picks', draft.team_owned_picks)
    app.router.add_post('/api/draft/trades', draft.trade_picks)
    app.router.add_post('/api/draft/import/sleeper', draft.import_sleeper)


async def _close_sleeper(app: web.Application) -> None:
    await app[SLEEPER_KEY].close()


def create_app(
    store: Optional[PlayerStore] = None,
    draft: Optional[LiveDraftService] = None,
    sleeper: Optional[SleeperService] = None
) -> web.Application:
    """
    Build the web application.

    Args:
        store: Player store (a new empty store by default)
        draft: Live draft session over the store (created from config by default)
        sleeper: Sleeper import service (created from config by default)
    """
    if store is None:
        store = PlayerStore()
    app = web.Application(middlewares=[error_middleware])
    app[STORE_KEY] = store
    app[DRAFT_KEY] = draft if draft is not None else LiveDraftService(store)
    app[SLEEPER_KEY] = sleeper if sleeper is not None else SleeperService()
    app.on_cleanup.append(_close_sleeper)

    setup_routes(app)
    logger.debug("Web application created")
    return app
