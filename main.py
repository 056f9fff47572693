from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, settings
from database import connect, disconnect, get_collection
from errors import CoffeeShopError, NotFoundError, StorageError, ValidationError
from logging_config import setup_logging
from schemas import CoffeeShop, CoffeeShopCreate, ErrorResponse, FavoriteUpdate, Product
from service import CoffeeShopService


def get_service(request: Request) -> CoffeeShopService:
    return CoffeeShopService(request.app.state.collection)


router = APIRouter(
    prefix="/api/coffeeShops",
    tags=["CoffeeShops"],
    responses={500: {"model": ErrorResponse, "description": "Some server error"}},
)

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Coffee shop not found"}}


@router.post("/", response_model=CoffeeShop, status_code=201, summary="Create a new coffee shop")
async def create_coffee_shop(payload: CoffeeShopCreate, service: CoffeeShopService = Depends(get_service)):
    return await service.create(payload)


@router.get("/", response_model=List[CoffeeShop], summary="Returns the list of all the coffee shops")
async def list_coffee_shops(service: CoffeeShopService = Depends(get_service)):
    return await service.list()


@router.get("/search", response_model=List[CoffeeShop], summary="Search coffee shops by name")
async def search_coffee_shops(
    q: Optional[str] = Query(None, description="Search term"),
    service: CoffeeShopService = Depends(get_service),
):
    return await service.search_by_name(q)


@router.get("/{shop_id}", response_model=CoffeeShop, responses=NOT_FOUND, summary="Get a coffee shop by ID")
async def get_coffee_shop(shop_id: str, service: CoffeeShopService = Depends(get_service)):
    return await service.get_by_id(shop_id)


@router.put(
    "/{shop_id}/favorite",
    response_model=CoffeeShop,
    responses=NOT_FOUND,
    summary="Toggle favorite status of a coffee shop by ID",
)
async def toggle_favorite(shop_id: str, payload: FavoriteUpdate, service: CoffeeShopService = Depends(get_service)):
    return await service.toggle_favorite(shop_id, payload.favorite)


@router.get(
    "/{shop_id}/products/{category}",
    response_model=List[Product],
    responses=NOT_FOUND,
    summary="Get products by category from a coffee shop",
)
async def get_products_by_category(shop_id: str, category: str, service: CoffeeShopService = Depends(get_service)):
    return await service.get_products_by_category(shop_id, category)


STATUS_CODES = {
    ValidationError: 422,
    NotFoundError: 404,
    StorageError: 500,
}


async def coffee_shop_error_handler(request: Request, exc: CoffeeShopError):
    body = {"message": exc.message}
    if isinstance(exc, ValidationError):
        body["errors"] = exc.errors
    return JSONResponse(status_code=STATUS_CODES.get(type(exc), 500), content=body)


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err["loc"] if part != "body"), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"message": "Invalid request", "errors": errors})


def create_app(config: Settings = settings) -> FastAPI:
    setup_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = connect(config.database_url)
        app.state.client = client
        app.state.collection = get_collection(client, config.database_name)
        try:
            yield
        finally:
            await disconnect(client)

    app = FastAPI(title=config.project_name, version=config.api_version, lifespan=lifespan)
    app.state.client = None
    app.state.database_name = config.database_name

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CoffeeShopError, coffee_shop_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    @app.get("/")
    def read_root():
        return {"message": "Coffee Shop API running"}

    @app.get("/test")
    async def test_database():
        response = {
            "backend": "✅ Running",
            "database": "❌ Not Available",
            "database_name": app.state.database_name,
            "connection_status": "Not Connected",
            "collections": [],
        }
        client = app.state.client
        if client is None:
            return response
        try:
            collections = await client[app.state.database_name].list_collection_names()
            response["collections"] = collections[:10]
            response["database"] = "✅ Connected & Working"
            response["connection_status"] = "Connected"
        except Exception as e:
            response["database"] = f"⚠️  Connected but Error: {str(e)[:50]}"
        return response

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
