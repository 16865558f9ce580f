"""
Pydantic schemas for Order operations
"""

from pydantic import BaseModel, Field, field_validator, ValidationInfo
from typing import Any, Optional
from datetime import date, datetime
import html
import math
import re

CALENDAR_DATE_PATTERN = re.compile(r'^(\d{4})([-/])(\d{2})\2(\d{2})$')
DECIMAL_PATTERN = re.compile(r'^[-+]?(\d+(\.\d*)?|\.\d+)$')
FLOAT_PATTERN = re.compile(r'^[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$')
EXTRA_HTML_ESCAPES = {"/": "&#x2F;", "\\": "&#x5C;", "`": "&#96;"}


def parse_non_negative_number(value: Any, message: str) -> float:
    """Accept an int, float or numeric string that is finite and >= 0"""
    if value is None or isinstance(value, bool):
        raise ValueError(message)
    if isinstance(value, str):
        value = value.strip()
        if not FLOAT_PATTERN.match(value):
            raise ValueError(message)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(message)
    if not math.isfinite(number) or number < 0:
        raise ValueError(message)
    return number


def escape_html(value: str) -> str:
    """HTML-escape &, <, >, quotes, slash, backslash and backtick"""
    escaped = html.escape(value)
    for char, entity in EXTRA_HTML_ESCAPES.items():
        escaped = escaped.replace(char, entity)
    return escaped


def parse_calendar_date(value: Any, field: str) -> str:
    """Validate YYYY-MM-DD (or YYYY/MM/DD) and return it as YYYY-MM-DD"""
    message = f"{field} must be a valid date"
    if not isinstance(value, str):
        raise ValueError(message)
    match = CALENDAR_DATE_PATTERN.match(value.strip())
    if not match:
        raise ValueError(message)
    try:
        parsed = date(int(match.group(1)), int(match.group(3)), int(match.group(4)))
    except ValueError:
        raise ValueError(message)
    return parsed.isoformat()


def parse_iso8601_date(value: Any, field: str) -> str:
    """Validate an ISO-8601 date or date-time and return its calendar date"""
    message = f"{field} must be an ISO-8601 date"
    if not isinstance(value, str):
        raise ValueError(message)
    text = value.strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        raise ValueError(message)


class OrderCreate(BaseModel):
    """Body of POST /orders; ORD_NUM is allocated by the server"""
    ORD_AMOUNT: float = Field(..., description="Order amount (>= 0)", examples=[5000])
    ADVANCE_AMOUNT: float = Field(..., description="Advance paid (>= 0)", examples=[1000])
    ORD_DATE: str = Field(..., description="Order date (YYYY-MM-DD)", examples=["2025-09-28"])
    CUST_CODE: str = Field(..., description="Customer code", examples=["C00001"])
    AGENT_CODE: str = Field(..., description="Agent code", examples=["A003"])
    ORD_DESCRIPTION: str = Field(..., description="Order description", examples=["New order description"])

    @field_validator('ORD_AMOUNT', 'ADVANCE_AMOUNT', mode='before')
    @classmethod
    def validate_amount(cls, v, info: ValidationInfo):
        return parse_non_negative_number(v, f'{info.field_name} must be a positive number')

    @field_validator('ORD_DATE', mode='before')
    @classmethod
    def validate_date(cls, v, info: ValidationInfo):
        return parse_calendar_date(v, info.field_name)

    @field_validator('CUST_CODE', 'AGENT_CODE', 'ORD_DESCRIPTION', mode='before')
    @classmethod
    def validate_required_text(cls, v, info: ValidationInfo):
        if not isinstance(v, str) or not v.strip():
            raise ValueError(f'{info.field_name} is required')
        return v.strip()


class OrderReplace(BaseModel):
    """Body of PUT /orders/{ORD_NUM}; replaces every column of the order"""
    ORD_AMOUNT: float = Field(..., description="Order amount (decimal, >= 0)")
    ADVANCE_AMOUNT: float = Field(..., description="Advance paid (decimal, >= 0)")
    ORD_DATE: str = Field(..., description="Order date (ISO-8601)")
    CUST_CODE: str = Field(..., description="Customer code")
    AGENT_CODE: str = Field(..., description="Agent code")
    ORD_DESCRIPTION: Optional[str] = Field(None, description="Order description; kept unchanged when omitted")

    @field_validator('ORD_AMOUNT', 'ADVANCE_AMOUNT', mode='before')
    @classmethod
    def validate_decimal(cls, v, info: ValidationInfo):
        message = f'{info.field_name} must be a non-negative decimal'
        if isinstance(v, str) and not DECIMAL_PATTERN.match(v.strip()):
            raise ValueError(message)
        return parse_non_negative_number(v, message)

    @field_validator('ORD_DATE', mode='before')
    @classmethod
    def validate_date(cls, v, info: ValidationInfo):
        return parse_iso8601_date(v, info.field_name)

    @field_validator('CUST_CODE', 'AGENT_CODE', 'ORD_DESCRIPTION', mode='before')
    @classmethod
    def escape_text(cls, v, info: ValidationInfo):
        if not isinstance(v, str):
            raise ValueError(f'{info.field_name} must be a string')
        return escape_html(v.strip())


class OrderPatch(BaseModel):
    """Body of PATCH /orders/{ORD_NUM}; only the fields sent are changed"""
    ORD_AMOUNT: Optional[float] = Field(None, description="Order amount (>= 0)")
    ADVANCE_AMOUNT: Optional[float] = Field(None, description="Advance paid (>= 0)")
    ORD_DATE: Optional[str] = Field(None, description="Order date (YYYY-MM-DD)")
    CUST_CODE: Optional[str] = Field(None, description="Customer code")
    AGENT_CODE: Optional[str] = Field(None, description="Agent code")
    ORD_DESCRIPTION: Optional[str] = Field(None, description="Order description")

    # Validators only see values the client actually sent, so an explicit
    # null is rejected while an absent field is simply left unchanged.
    @field_validator('ORD_AMOUNT', 'ADVANCE_AMOUNT', mode='before')
    @classmethod
    def validate_amount(cls, v, info: ValidationInfo):
        return parse_non_negative_number(v, f'{info.field_name} must be a positive number')

    @field_validator('ORD_DATE', mode='before')
    @classmethod
    def validate_date(cls, v, info: ValidationInfo):
        return parse_calendar_date(v, info.field_name)

    @field_validator('CUST_CODE', 'AGENT_CODE', mode='before')
    @classmethod
    def validate_code(cls, v, info: ValidationInfo):
        if not isinstance(v, str) or len(v) < 1:
            raise ValueError(f'{info.field_name} must not be empty')
        return v

    @field_validator('ORD_DESCRIPTION', mode='before')
    @classmethod
    def trim_description(cls, v):
        if not isinstance(v, str):
            raise ValueError('ORD_DESCRIPTION must be a string')
        return v.strip()

    def changes(self) -> dict:
        """Fields present in the request body, in declaration order"""
        return self.model_dump(exclude_unset=True)


class OrderCreatedResponse(BaseModel):
    message: str = Field(..., examples=["Order created successfully"])
    ORD_NUM: int = Field(..., examples=[1])


class OrderWriteResponse(BaseModel):
    message: str = Field(..., examples=["Order updated"])
    ORD_NUM: int


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Order partially updated"])


class FieldError(BaseModel):
    field: str
    message: str
    location: str


class ValidationErrorResponse(BaseModel):
    errors: list[FieldError]


class DatabaseErrorResponse(BaseModel):
    error: str
