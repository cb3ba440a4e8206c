from iskio.models.content import HomeContent, HomeContentPayload, InstagramPayload, InstagramPost
from iskio.models.service import CreatedResponse
from iskio.services.api_client import ApiClient


async def list_home_content(api: ApiClient) -> list[HomeContent]:
    data = await api.get("/home-content")
    return [HomeContent.model_validate(item) for item in data or []]


async def current_home_content(api: ApiClient) -> HomeContent | None:
    """The hero shows the first entry only."""
    items = await list_home_content(api)
    return items[0] if items else None


async def create_home_content(api: ApiClient, payload: HomeContentPayload) -> CreatedResponse:
    data = await api.post("/home-content", json=payload.model_dump())
    return CreatedResponse.model_validate(data)


async def update_home_content(api: ApiClient, item_id: int | str, payload: HomeContentPayload) -> dict:
    return await api.put(
        "/home-content", json=payload.model_dump(exclude_unset=True), params={"id": item_id}
    )


async def delete_home_content(api: ApiClient, item_id: int | str) -> dict:
    return await api.delete("/home-content", params={"id": item_id})


async def list_instagram_posts(api: ApiClient) -> list[InstagramPost]:
    data = await api.get("/instagram")
    return [InstagramPost.model_validate(item) for item in data or []]


def visible_posts(posts: list[InstagramPost]) -> list[InstagramPost]:
    return sorted(
        (p for p in posts if p.activo and p.embed_url),
        key=lambda p: p.orden,
    )


async def create_instagram_post(api: ApiClient, payload: InstagramPayload) -> CreatedResponse:
    body = payload.model_dump()
    body["embed_url"] = body["embed_url"].strip()
    data = await api.post("/instagram", json=body)
    return CreatedResponse.model_validate(data)


async def update_instagram_post(api: ApiClient, post_id: int | str, payload: InstagramPayload) -> dict:
    return await api.put(
        "/instagram", json=payload.model_dump(exclude_unset=True), params={"id": post_id}
    )


async def delete_instagram_post(api: ApiClient, post_id: int | str) -> dict:
    return await api.delete("/instagram", params={"id": post_id})
