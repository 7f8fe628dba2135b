"""Record shapes as persisted by the key-value store (camelCase JSON).

These models accept the stored data as-is, including legacy records with
missing fields. Defaults are applied later, once, by
``pipeline.record_normalizer``.
"""

from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RawNumber = Union[Decimal, int, float, str, None]


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ClientRecord(_Record):
    """Stored client."""

    id: str = ""
    name: str = ""
    mf: str = ""
    address: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None


class CompanyRecord(_Record):
    """Stored issuing company."""

    id: str = ""
    name: str = ""
    mf: str = ""
    address: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    is_default: Optional[bool] = Field(None, alias="isDefault")
    currency: Optional[str] = None
    letterhead_url: Optional[str] = Field(None, alias="letterheadUrl", repr=False)
    hide_company_info_on_pdf: Optional[bool] = Field(None, alias="hideCompanyInfoOnPdf")


class InvoiceItemRecord(_Record):
    """Stored (or draft) line item; numeric fields may still be raw strings."""

    id: Optional[str] = None
    description: str = ""
    unit: Optional[str] = None
    quantity: RawNumber = None
    unit_price: RawNumber = Field(None, alias="unitPrice")


class InvoiceRecord(_Record):
    """Stored invoice or quote with its client/company snapshots."""

    id: str = ""
    type: Optional[str] = None
    number: str = ""
    date: str = ""
    due_date: Optional[str] = Field(None, alias="dueDate")
    client_id: Optional[str] = Field(None, alias="clientId")
    client_snap: Optional[ClientRecord] = Field(None, alias="clientSnap")
    company_snap: Optional[CompanyRecord] = Field(None, alias="companySnap")
    items: List[InvoiceItemRecord] = Field(default_factory=list)
    tva_applicable: Optional[bool] = Field(None, alias="tvaApplicable")
    tva_rate: RawNumber = Field(None, alias="tvaRate")
    notes: Optional[str] = None
    status: Optional[str] = None
    currency: Optional[str] = None
