from pydantic import BaseModel, Field, field_validator

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class ProductCreate(EmptyStringModel):
    description: str = Field(max_length=200)
    output_unit: str = Field(max_length=16)

    @field_validator("output_unit")
    @classmethod
    def upper_unit(cls, value: str) -> str:
        return value.upper()


class ProductOut(BaseModel):
    id: int
    description: str
    output_unit: str

    class Config:
        from_attributes = True
