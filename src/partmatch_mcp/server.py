"""Part Match MCP Server - classify MPNs and score part interchangeability."""

import json
import logging
import time
from collections import deque
from typing import Any

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from . import __version__
from .config import DEFAULT_PROFILE, HTTP_PORT, RATE_LIMIT_REQUESTS
from .engine import SimilarityEngine
from .equivalence import builtin_equivalences
from .handlers import BUILTIN_HANDLERS, register_handlers
from .metadata import default_registry
from .patterns import PatternRegistry
from .profiles import SimilarityProfile
from .resolver import TypeResolver
from .types import ComponentType

logger = logging.getLogger(__name__)

# Registries are filled once here, before the server accepts requests
_patterns = register_handlers(PatternRegistry(), BUILTIN_HANDLERS)
_resolver = TypeResolver(_patterns)
_metadata = default_registry()
_engine = SimilarityEngine(_metadata, builtin_equivalences())


def _default_profile() -> SimilarityProfile:
    profile = SimilarityProfile.from_name(DEFAULT_PROFILE)
    if profile is None:
        logger.warning(f"Unknown DEFAULT_PROFILE {DEFAULT_PROFILE!r}, using REPLACEMENT")
        return SimilarityProfile.REPLACEMENT
    return profile


def _parse_specs(value: dict[str, Any] | str | None) -> dict[str, Any] | None:
    """Accept a spec map as an object or as a JSON-encoded string.

    Some MCP clients serialize object parameters as strings.
    """
    if value is None or isinstance(value, dict):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            logger.debug(f"Failed to parse spec map as JSON: {value[:100]!r}")
            return None
        if isinstance(parsed, dict):
            return parsed
    return None


# =============================================================================
# TOOL IMPLEMENTATIONS
# =============================================================================


def resolve_payload(mpn: str) -> dict:
    return _resolver.resolve(mpn).to_dict()


def match_for_handler_payload(mpn: str, component_type: str, handler_id: str) -> dict:
    ctype = ComponentType.from_name(component_type)
    if ctype is None:
        return {"error": f"Unknown component type '{component_type}'"}
    handlers = _patterns.handlers_for(ctype)
    if handler_id not in handlers:
        return {
            "error": f"Handler '{handler_id}' has no patterns for {ctype.value}",
            "handlers": handlers,
        }
    return {
        "mpn": mpn,
        "type": ctype.value,
        "handler": handler_id,
        "matches": _resolver.matches_for_handler(mpn, ctype, handler_id),
    }


def score_payload(
    original_specs: dict[str, Any] | str | None,
    candidate_specs: dict[str, Any] | str | None,
    component_type: str | None = None,
    profile: str | None = None,
    original_mpn: str | None = None,
    candidate_mpn: str | None = None,
) -> dict:
    specs_a = _parse_specs(original_specs)
    specs_b = _parse_specs(candidate_specs)
    if specs_a is None and original_specs is not None:
        return {"error": "original_specs must be an object of spec name to value"}
    if specs_b is None and candidate_specs is not None:
        return {"error": "candidate_specs must be an object of spec name to value"}

    chosen = SimilarityProfile.from_name(profile) if profile else _default_profile()
    if chosen is None:
        return {
            "error": f"Unknown profile '{profile}'",
            "profiles": [p.name for p in SimilarityProfile],
        }

    if component_type:
        ctype = ComponentType.from_name(component_type)
        if ctype is None:
            return {"error": f"Unknown component type '{component_type}'"}
        result = _engine.score(specs_a, specs_b, ctype, chosen, original_mpn, candidate_mpn)
    elif original_mpn and candidate_mpn:
        result = _engine.score_mpns(_resolver, original_mpn, specs_a, candidate_mpn, specs_b, chosen)
    else:
        return {"error": "Provide component_type, or both original_mpn and candidate_mpn"}
    return result.to_dict()


def profiles_payload() -> dict:
    return {
        "default": _default_profile().name,
        "profiles": [p.to_dict() for p in SimilarityProfile],
    }


def type_metadata_payload(component_type: str) -> dict:
    ctype = ComponentType.from_name(component_type)
    if ctype is None:
        return {"error": f"Unknown component type '{component_type}'"}
    metadata = _metadata.get(ctype)
    if metadata is None:
        return {"error": f"No similarity metadata for {ctype.value}", "component_type": ctype.value}
    return metadata.to_dict()


# =============================================================================
# MCP SERVER
# =============================================================================

mcp = FastMCP(
    name="partmatch",
    instructions="Classify electronic part numbers (MPNs) into component types and score whether one part can replace another. Use resolve_type first to learn a part's type, then score_parts with both parts' specs. A score result is only acceptable when meets_threshold is true; a result with scorable=false means the type has no rules, not that the parts differ.",
)


def _read_only(title: str) -> ToolAnnotations:
    return ToolAnnotations(
        title=title,
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )


@mcp.tool(annotations=_read_only("Resolve Component Type"))
def resolve_type(mpn: str) -> dict:
    """Determine the most specific component type for a manufacturer part number.

    Args:
        mpn: Manufacturer part number (e.g., "IRF540N", "RC0603FR-0710KL", "LM358N")

    Returns:
        type (or "UNKNOWN"), base_type, the handler whose rules matched,
        specificity, and every candidate type ordered most specific first.
    """
    return resolve_payload(mpn)


@mcp.tool(annotations=_read_only("Check Handler Match"))
def match_for_handler(mpn: str, component_type: str, handler_id: str) -> dict:
    """Check an MPN against one vendor handler's patterns for one type.

    Args:
        mpn: Manufacturer part number
        component_type: Type identifier (e.g., "MOSFET_INFINEON", "MOSFET")
        handler_id: Handler id (e.g., "infineon", "st", "generic")
    """
    return match_for_handler_payload(mpn, component_type, handler_id)


@mcp.tool(annotations=_read_only("Score Part Replacement"))
def score_parts(
    original_specs: dict[str, Any] | str,
    candidate_specs: dict[str, Any] | str,
    component_type: str | None = None,
    profile: str | None = None,
    original_mpn: str | None = None,
    candidate_mpn: str | None = None,
) -> dict:
    """Score how well a candidate part replaces the original.

    Args:
        original_specs: Spec map of the original part (e.g., {"resistance": "10k", "package": "0603"})
        candidate_specs: Spec map of the candidate part
        component_type: Type identifier. If omitted, resolved from original_mpn.
        profile: DESIGN_PHASE, REPLACEMENT, COST_OPTIMIZATION, PERFORMANCE_UPGRADE
            or EMERGENCY_SOURCING (default from server config)
        original_mpn: Original MPN, used for type resolution and known equivalents
        candidate_mpn: Candidate MPN

    Returns:
        score in [0, 1], meets_threshold, the failing critical spec if any,
        and a per-spec breakdown.
    """
    return score_payload(
        original_specs, candidate_specs, component_type, profile, original_mpn, candidate_mpn,
    )


@mcp.tool(annotations=_read_only("List Similarity Profiles"))
def list_profiles() -> dict:
    """List similarity profiles with their weights and minimum scores."""
    return profiles_payload()


@mcp.tool(annotations=_read_only("Get Type Metadata"))
def get_type_metadata(component_type: str) -> dict:
    """Show which specs are compared for a component type and how."""
    return type_metadata_payload(component_type)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding one-minute request window per client IP."""

    MAX_TRACKED_IPS = 10_000

    def __init__(self, app, requests_per_minute: int = RATE_LIMIT_REQUESTS):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.windows: dict[str, deque[float]] = {}

    def _client_ip(self, request) -> str:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[-1].strip() or "unknown"
        return request.client.host if request.client else "unknown"

    def is_limited(self, client_ip: str, now: float | None = None) -> bool:
        now = time.time() if now is None else now
        window_start = now - 60

        if client_ip not in self.windows and len(self.windows) >= self.MAX_TRACKED_IPS:
            stale = [ip for ip, w in self.windows.items() if not w or w[-1] < window_start]
            for ip in stale:
                del self.windows[ip]
            if len(self.windows) >= self.MAX_TRACKED_IPS:
                return True

        window = self.windows.setdefault(client_ip, deque())
        while window and window[0] <= window_start:
            window.popleft()
        if len(window) >= self.requests_per_minute:
            return True
        window.append(now)
        return False

    async def dispatch(self, request, call_next):
        if request.url.path == "/health":
            return await call_next(request)
        if self.is_limited(self._client_ip(request)):
            return JSONResponse(
                status_code=429,
                content={"error": "Rate limit exceeded", "retry_after": 60},
                headers={"Retry-After": "60"},
            )
        return await call_next(request)


async def health(request):
    return JSONResponse({
        "status": "healthy",
        "service": "partmatch-mcp",
        "version": __version__,
        "patterns": _patterns.pattern_counts(),
        "metadata_types": len(_metadata),
    })


def create_app():
    """Create the ASGI application."""
    middleware = [
        Middleware(RateLimitMiddleware, requests_per_minute=RATE_LIMIT_REQUESTS),
    ]
    app = mcp.http_app(
        path="/mcp",
        middleware=middleware,
        transport="streamable-http",
        stateless_http=True,
    )
    app.routes.append(Route("/health", health))
    return app


app = create_app()


class _HealthFilterLog(logging.Filter):
    """Suppress /health access logs from container healthchecks."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/health" not in record.getMessage()


def main():
    """Run the server."""
    import uvicorn

    logging.getLogger("uvicorn.access").addFilter(_HealthFilterLog())

    uvicorn.run(
        "partmatch_mcp.server:app",
        host="0.0.0.0",
        port=HTTP_PORT,
        lifespan="on",
    )


if __name__ == "__main__":
    main()
