from fastapi_users import schemas


class UserCreate(schemas.BaseUserCreate):
    name: str = ""
    tenant_id: int
