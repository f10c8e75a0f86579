"""Typed records for the repeated deal entities.

Every record field other than ``id`` carries the attribute path it is stored
under as its pydantic alias, so ``BorrowerRecord.street`` lives at
``borrower2.address.street`` in the flat field map.  String fields default to
``""`` and boolean fields to ``False``.
"""
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class EntityRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""

    @classmethod
    def attribute_paths(cls) -> Dict[str, str]:
        """Map record field names to their attribute paths."""
        return {
            name: info.alias or name
            for name, info in cls.model_fields.items()
            if name != "id"
        }

    @classmethod
    def is_boolean(cls, name: str) -> bool:
        return cls.model_fields[name].annotation is bool

    def to_fields(self) -> Dict[str, str]:
        """Serialize to ``{attribute path: text}`` with booleans as ``"true"``/``"false"``."""
        out: Dict[str, str] = {}
        for name, path in self.attribute_paths().items():
            value = getattr(self, name)
            if isinstance(value, bool):
                out[path] = "true" if value else "false"
            else:
                out[path] = str(value)
        return out


class BorrowerRecord(EntityRecord):
    is_primary: bool = False
    borrower_type: str = ""
    full_name: str = ""
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = Field("", alias="phone.mobile")
    street: str = Field("", alias="address.street")
    city: str = Field("", alias="address.city")
    state: str = Field("", alias="address.state")
    zip_code: str = Field("", alias="address.zip")
    tax_id_type: str = ""
    tax_id: str = ""
    credit_score: str = ""
    capacity: str = ""


class CoBorrowerRecord(EntityRecord):
    full_name: str = ""
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    salutation: str = ""
    generation: str = ""
    email: str = ""
    home_phone: str = Field("", alias="phone.home")
    work_phone: str = Field("", alias="phone.work")
    mobile_phone: str = Field("", alias="phone.mobile")
    fax: str = Field("", alias="phone.fax")
    street: str = Field("", alias="address.street")
    city: str = Field("", alias="address.city")
    state: str = Field("", alias="address.state")
    zip_code: str = Field("", alias="address.zip")
    mailing_street: str = Field("", alias="mailing_address.street")
    mailing_city: str = Field("", alias="mailing_address.city")
    mailing_state: str = Field("", alias="mailing_address.state")
    mailing_zip: str = Field("", alias="mailing_address.zip")
    mailing_same_as_primary: bool = False
    tin: str = ""
    relation: str = ""
    dob: str = ""
    credit_score: str = ""
    credit_reporting: bool = False
    send_notifications: bool = False
    parent_borrower_prefix: str = ""


class LenderRecord(EntityRecord):
    is_primary: bool = False
    type: str = ""
    full_name: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = Field("", alias="phone.work")
    city: str = Field("", alias="primary_address.city")
    state: str = Field("", alias="primary_address.state")
    tax_id: str = ""
    vesting: str = ""


class PropertyRecord(EntityRecord):
    primary_property: bool = False
    description: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = Field("", alias="zip")
    county: str = ""
    property_type: str = Field("", alias="appraisal_property_type")
    occupancy: str = Field("", alias="appraisal_occupancy")
    appraised_value: str = ""
    appraised_date: str = ""
    ltv: str = ""
    apn: str = ""
    priority: str = ""


class LienRecord(EntityRecord):
    property: str = ""
    priority: str = ""
    holder: str = ""
    account: str = ""
    contact: str = ""
    phone: str = ""
    email: str = ""
    loan_type: str = ""
    anticipated: bool = False
    existing_payoff: bool = False
    interest_rate: str = ""
    maturity_date: str = ""
    original_balance: str = ""
    current_balance: str = ""
    regular_payment: str = ""
    note: str = ""


class ChargeRecord(EntityRecord):
    description: str = ""
    unpaid_balance: str = ""
    owed_to: str = ""
    owed_from: str = ""
    total_due: str = ""
    interest_from: str = ""


class InsuranceRecord(EntityRecord):
    property: str = ""
    description: str = ""
    insured_name: str = ""
    company_name: str = ""
    policy_number: str = ""
    expiration: str = ""
    coverage: str = ""
    active: bool = False
    agent_name: str = ""
    phone_number: str = ""
    email: str = ""
    note: str = ""


class NoteRecord(EntityRecord):
    high_priority: bool = False
    date: str = ""
    account: str = ""
    name: str = ""
    reference: str = ""
    content: str = ""
