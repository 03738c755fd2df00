"""Pydantic schemas for API request/response models.

Engine dataclasses are used directly as nested field types; pydantic
validates them from JSON the same way it validates models.
"""

from pydantic import BaseModel, Field

from propfolio.models.metrics import OperationalMetrics
from propfolio.models.portfolio import (
    PortfolioAssetReport,
    PortfolioCashFlowReport,
    ReportError,
)
from propfolio.models.property import Property
from propfolio.models.reports import PropertyPLReport
from propfolio.models.scores import InvestmentMetrics
from propfolio.models.transaction import Transaction


# ---- Request schemas ----

class ScoreRequest(BaseModel):
    property: Property


class PropertyPLRequest(BaseModel):
    transactions: list[Transaction] = Field(default_factory=list)
    property_id: str
    property_address: str = ""
    months: int | None = Field(None, ge=1, le=120, description="Defaults to the configured window")


class PortfolioPLRequest(BaseModel):
    transactions: list[Transaction] = Field(default_factory=list)
    properties: list[Property] = Field(default_factory=list)
    months: int | None = Field(None, ge=1, le=120)


class OperationalRequest(BaseModel):
    property: Property
    transactions: list[Transaction] = Field(default_factory=list)
    months: int | None = Field(None, ge=1, le=120)


class PortfolioRequest(BaseModel):
    properties: list[Property] = Field(default_factory=list)


# ---- Response schemas ----

class ScoreResponse(BaseModel):
    legacy_score: int
    metrics: InvestmentMetrics


class OperationalResponse(BaseModel):
    pl_report: PropertyPLReport
    metrics: OperationalMetrics


class CashFlowReportResponse(BaseModel):
    data: PortfolioCashFlowReport | None = None
    errors: list[ReportError] = Field(default_factory=list)
    has_warnings: bool = False


class AssetReportResponse(BaseModel):
    data: PortfolioAssetReport | None = None
    errors: list[ReportError] = Field(default_factory=list)
    has_warnings: bool = False
