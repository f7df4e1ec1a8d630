import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, load_settings
from errors import LinkBioError, NotFound, StoreUnavailable, ValidationError
from logger import setup_logger
from schemas import (
    COLOR_PRESETS,
    ColorPresets,
    IconOption,
    Link,
    LinkBioData,
    LinkCreate,
    LinkIcon,
    LinkPatch,
    Preview,
    UserProfile,
    UserProfilePatch,
)
from service import LinkBioService

logger = logging.getLogger("linkbio.api")


# ----------------------- Helpers -----------------------

def to_http(exc: LinkBioError) -> HTTPException:
    if isinstance(exc, NotFound):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ValidationError):
        logger.warning("Rejected input: %s", exc)
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, StoreUnavailable):
        return HTTPException(status_code=503, detail=str(exc))
    logger.exception("Unexpected store failure")
    return HTTPException(status_code=500, detail="Store failure")


def get_service(request: Request) -> LinkBioService:
    return request.app.state.service


def create_app(service: Optional[LinkBioService] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logger(level=settings.log_level)
    if service is None:
        service = LinkBioService(
            latency_scale=settings.latency_scale,
            validate=settings.validate,
            share_host=settings.share_host,
        )

    app = FastAPI(title="linkbio API")
    app.state.service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ----------------------- Public -----------------------

    @app.get("/")
    def read_root():
        return {"name": "linkbio", "status": "ok"}

    @app.get("/icons", response_model=List[IconOption])
    def list_icons():
        return [IconOption(value=icon, label=icon.label) for icon in LinkIcon]

    @app.get("/presets/colors", response_model=ColorPresets)
    def color_presets():
        return COLOR_PRESETS

    @app.get("/preview", response_model=Preview)
    async def preview(svc: LinkBioService = Depends(get_service)):
        try:
            return await svc.get_preview()
        except LinkBioError as e:
            raise to_http(e)

    @app.get("/linkbio", response_model=LinkBioData)
    async def linkbio(svc: LinkBioService = Depends(get_service)):
        try:
            return await svc.get_data()
        except LinkBioError as e:
            raise to_http(e)

    # ----------------------- Profile -----------------------

    @app.get("/profile", response_model=UserProfile)
    async def get_profile(svc: LinkBioService = Depends(get_service)):
        try:
            return await svc.get_profile()
        except LinkBioError as e:
            raise to_http(e)

    @app.patch("/profile", response_model=UserProfile)
    async def update_profile(payload: UserProfilePatch, svc: LinkBioService = Depends(get_service)):
        try:
            return await svc.update_profile(payload)
        except LinkBioError as e:
            raise to_http(e)

    # ----------------------- Links -----------------------

    @app.get("/links", response_model=List[Link])
    async def get_links(svc: LinkBioService = Depends(get_service)):
        try:
            return await svc.get_links()
        except LinkBioError as e:
            raise to_http(e)

    @app.post("/links", response_model=Link, status_code=201)
    async def create_link(payload: LinkCreate, svc: LinkBioService = Depends(get_service)):
        try:
            return await svc.create_link(payload)
        except LinkBioError as e:
            raise to_http(e)

    @app.patch("/links/{link_id}", response_model=Link)
    async def update_link(link_id: str, payload: LinkPatch, svc: LinkBioService = Depends(get_service)):
        try:
            return await svc.update_link(link_id, payload)
        except LinkBioError as e:
            raise to_http(e)

    @app.delete("/links/{link_id}", status_code=204)
    async def delete_link(link_id: str, svc: LinkBioService = Depends(get_service)):
        try:
            await svc.delete_link(link_id)
        except LinkBioError as e:
            raise to_http(e)
        return Response(status_code=204)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = load_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
