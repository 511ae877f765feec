from pydantic import BaseModel, field_validator


class CategoryCreate(BaseModel):
    blog_id: str
    name: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('El nombre de la categoría no puede estar vacío')
        if len(v.strip()) > 100:
            raise ValueError('El nombre de la categoría no puede tener más de 100 caracteres')
        return v.strip()


class CategoryOut(BaseModel):
    id: str
    name: str
    blog_id: str

    class Config:
        from_attributes = True
