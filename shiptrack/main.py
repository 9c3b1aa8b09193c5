from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from shiptrack.config import settings
from shiptrack.errors import (
    ConfigurationError,
    ExternalServiceError,
    QuotaExceededError,
    ShipTrackError,
)
from shiptrack.logging_config import configure
from shiptrack.models.request import PlaceSelectionRequest
from shiptrack.models.response import AutocompleteResponse, SessionResponse, TrackerView
from shiptrack.services.directions.google_directions_service import GoogleDirectionsService
from shiptrack.services.places.google_places_service import GooglePlacesService
from shiptrack.services.session_service import SessionNotFoundError, SessionService

configure(settings.log_level)

app = FastAPI(
    title="ShipTrack API",
    description="Pick an origin and destination, draw the driving route between them",
    version=settings.api_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache
def _build_session_service() -> SessionService:
    return SessionService(
        places_service=GooglePlacesService(),
        directions_service=GoogleDirectionsService(),
    )


def get_session_service() -> SessionService:
    try:
        return _build_session_service()
    except ConfigurationError as e:
        raise HTTPException(status_code=503, detail=f"Service misconfigured: {e}")


def _http_error(e: ShipTrackError) -> HTTPException:
    if not e.recoverable:
        return HTTPException(status_code=503, detail=f"Service misconfigured: {e}")
    if isinstance(e, QuotaExceededError):
        return HTTPException(status_code=429, detail=str(e))
    if isinstance(e, ExternalServiceError):
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=422, detail=str(e))


def _lookup(service: SessionService, session_id: str):
    try:
        return service.get_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")


@app.get("/api/v1/places/autocomplete", response_model=AutocompleteResponse)
async def autocomplete(
    text: str = Query(..., alias="input", min_length=1),
    service: SessionService = Depends(get_session_service),
):
    """Address suggestions for the From / To fields"""
    try:
        predictions = await service.places_service.autocomplete(text)
    except ShipTrackError as e:
        raise _http_error(e)
    return AutocompleteResponse(predictions=predictions)


@app.post("/api/v1/sessions", response_model=SessionResponse, status_code=201)
async def open_session(service: SessionService = Depends(get_session_service)):
    session = service.open_session()
    return SessionResponse(session_id=session.session_id, view=session.view())


@app.get("/api/v1/sessions/{session_id}", response_model=TrackerView)
async def get_session(
    session_id: str, service: SessionService = Depends(get_session_service)
):
    return _lookup(service, session_id).view()


@app.delete("/api/v1/sessions/{session_id}", status_code=204)
async def close_session(
    session_id: str, service: SessionService = Depends(get_session_service)
):
    _lookup(service, session_id)
    await service.close_session(session_id)


@app.post("/api/v1/sessions/{session_id}/places", response_model=TrackerView)
async def select_place(
    session_id: str,
    request: PlaceSelectionRequest,
    service: SessionService = Depends(get_session_service),
):
    """A suggestion was picked for the origin or destination"""
    _lookup(service, session_id)
    try:
        return await service.select_place(
            session_id, request.field, place_id=request.place_id, details=request.details
        )
    except ShipTrackError as e:
        raise _http_error(e)


@app.post("/api/v1/sessions/{session_id}/track", response_model=TrackerView)
async def track(session_id: str, service: SessionService = Depends(get_session_service)):
    """Fit both points on the map and draw the route between them

    Route failures are reported in the view's ``error`` field.
    """
    _lookup(service, session_id)
    return await service.track(session_id)


@app.get("/health")
async def health_check():
    """Health check"""
    return {"status": "healthy", "version": settings.api_version}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
