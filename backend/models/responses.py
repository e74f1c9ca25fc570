from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TransactionOut(_CamelModel):
    id: int
    title: str
    price: float
    description: str | None = None
    category: str
    image: str | None = None
    sold: bool
    date_of_sale: datetime


class TransactionPage(_CamelModel):
    data: list[TransactionOut]
    total: int
    page: int
    total_pages: int


class Statistics(_CamelModel):
    total_sale_amount: float
    total_sold_items: int
    total_unsold_items: int


class CombinedData(_CamelModel):
    statistics: Statistics
    bar_chart: dict[str, int]
    pie_chart: dict[str, int]
