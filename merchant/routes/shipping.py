"""Shipping configuration API routes"""

from fastapi import APIRouter, Request, Response

router = APIRouter(prefix="/api/shipping", tags=["Shipping"])


@router.get("/regions")
async def list_custom_regions(request: Request):
    """List the store's custom shipping regions in declaration order"""
    regions = request.app.state.shipping_regions
    store_code = request.app.state.settings.store_code
    return Response(content=regions.export_json(store_code), media_type="application/json")
