"""
Analysis Result Schema

Pydantic models for the status envelope and the analyze result returned by
the Document Intelligence service (REST API version 2024-11-30).

The analysis outcome itself is ``AnalysisOutcome``, which keeps the decoded
service JSON untouched. The models are a lenient typed view over it: every
field is optional, unknown fields are kept and timestamps stay strings.
``to_payload()`` serializes with ``exclude_unset`` so absent fields stay absent.
Numbers are coerced to the declared type, so ``angle: 0`` reads back as
``0.0``; use ``AnalysisOutcome.to_payload()`` for the exact response.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ServiceModel(BaseModel):
    """Base for all wire models: camelCase aliases, unknown fields kept."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        protected_namespaces=(),
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the service's JSON shape."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class Span(ServiceModel):
    """Contiguous region of the concatenated content property."""

    offset: Optional[int] = None
    length: Optional[int] = None


class BoundingRegion(ServiceModel):
    """Bounding polygon on a specific page."""

    page_number: Optional[int] = None
    polygon: list[float] = Field(default_factory=list)


class Word(ServiceModel):
    content: Optional[str] = None
    polygon: Optional[list[float]] = None
    span: Optional[Span] = None
    confidence: Optional[float] = None


class SelectionMark(ServiceModel):
    state: Optional[str] = None
    polygon: Optional[list[float]] = None
    span: Optional[Span] = None
    confidence: Optional[float] = None


class Line(ServiceModel):
    content: Optional[str] = None
    polygon: Optional[list[float]] = None
    spans: list[Span] = Field(default_factory=list)


class Barcode(ServiceModel):
    kind: Optional[str] = None
    value: Optional[str] = None
    polygon: Optional[list[float]] = None
    span: Optional[Span] = None
    confidence: Optional[float] = None


class Formula(ServiceModel):
    kind: Optional[str] = None
    value: Optional[str] = None
    polygon: Optional[list[float]] = None
    span: Optional[Span] = None
    confidence: Optional[float] = None


class DocumentPage(ServiceModel):
    """Content and layout elements extracted from one page of the input."""

    page_number: Optional[int] = None
    angle: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    unit: Optional[str] = None
    spans: list[Span] = Field(default_factory=list)
    words: Optional[list[Word]] = None
    selection_marks: Optional[list[SelectionMark]] = None
    lines: Optional[list[Line]] = None
    barcodes: Optional[list[Barcode]] = None
    formulas: Optional[list[Formula]] = None


class Paragraph(ServiceModel):
    role: Optional[str] = None
    content: Optional[str] = None
    bounding_regions: Optional[list[BoundingRegion]] = None
    spans: list[Span] = Field(default_factory=list)


class Caption(ServiceModel):
    content: Optional[str] = None
    bounding_regions: Optional[list[BoundingRegion]] = None
    spans: list[Span] = Field(default_factory=list)
    elements: Optional[list[str]] = None


class Footnote(ServiceModel):
    content: Optional[str] = None
    bounding_regions: Optional[list[BoundingRegion]] = None
    spans: list[Span] = Field(default_factory=list)
    elements: Optional[list[str]] = None


class TableCell(ServiceModel):
    kind: Optional[str] = None
    row_index: Optional[int] = None
    column_index: Optional[int] = None
    row_span: Optional[int] = None
    column_span: Optional[int] = None
    content: Optional[str] = None
    bounding_regions: Optional[list[BoundingRegion]] = None
    spans: list[Span] = Field(default_factory=list)
    elements: Optional[list[str]] = None


class DocumentTable(ServiceModel):
    row_count: Optional[int] = None
    column_count: Optional[int] = None
    cells: list[TableCell] = Field(default_factory=list)
    bounding_regions: Optional[list[BoundingRegion]] = None
    spans: list[Span] = Field(default_factory=list)
    caption: Optional[Caption] = None
    footnotes: Optional[list[Footnote]] = None


class Figure(ServiceModel):
    id: Optional[str] = None
    bounding_regions: Optional[list[BoundingRegion]] = None
    spans: list[Span] = Field(default_factory=list)
    elements: Optional[list[str]] = None
    caption: Optional[Caption] = None
    footnotes: Optional[list[Footnote]] = None


class Section(ServiceModel):
    spans: list[Span] = Field(default_factory=list)
    elements: Optional[list[str]] = None


class KeyValueElement(ServiceModel):
    content: Optional[str] = None
    bounding_regions: Optional[list[BoundingRegion]] = None
    spans: list[Span] = Field(default_factory=list)


class KeyValuePair(ServiceModel):
    key: Optional[KeyValueElement] = None
    value: Optional[KeyValueElement] = None
    confidence: Optional[float] = None


class Style(ServiceModel):
    """Observed text style (handwriting, font, colour) over some spans."""

    is_handwritten: Optional[bool] = None
    similar_font_family: Optional[str] = None
    font_style: Optional[str] = None
    font_weight: Optional[str] = None
    color: Optional[str] = None
    background_color: Optional[str] = None
    spans: list[Span] = Field(default_factory=list)
    confidence: Optional[float] = None


class Language(ServiceModel):
    locale: Optional[str] = None
    spans: list[Span] = Field(default_factory=list)
    confidence: Optional[float] = None


class CurrencyValue(ServiceModel):
    amount: Optional[float] = None
    currency_symbol: Optional[str] = None
    currency_code: Optional[str] = None


class AddressValue(ServiceModel):
    house_number: Optional[str] = None
    po_box: Optional[str] = None
    road: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country_region: Optional[str] = None
    street_address: Optional[str] = None
    unit: Optional[str] = None
    city_district: Optional[str] = None
    state_district: Optional[str] = None
    suburb: Optional[str] = None
    house: Optional[str] = None
    level: Optional[str] = None


class DocumentField(ServiceModel):
    """Content and location of an extracted field value.

    Exactly one ``value*`` attribute is populated, depending on ``type``.
    Date and time values are kept as the service's ISO strings.
    """

    type: Optional[str] = None
    value_string: Optional[str] = None
    value_date: Optional[str] = None
    value_time: Optional[str] = None
    value_phone_number: Optional[str] = None
    value_number: Optional[float] = None
    value_integer: Optional[int] = None
    value_selection_mark: Optional[str] = None
    value_signature: Optional[str] = None
    value_country_region: Optional[str] = None
    value_array: Optional[list[DocumentField]] = None
    value_object: Optional[dict[str, DocumentField]] = None
    value_currency: Optional[CurrencyValue] = None
    value_address: Optional[AddressValue] = None
    value_boolean: Optional[bool] = None
    value_selection_group: Optional[list[str]] = None
    content: Optional[str] = None
    bounding_regions: Optional[list[BoundingRegion]] = None
    spans: Optional[list[Span]] = None
    confidence: Optional[float] = None


class AnalyzedDocument(ServiceModel):
    """A document extracted by a prebuilt or custom model."""

    doc_type: Optional[str] = None
    bounding_regions: Optional[list[BoundingRegion]] = None
    spans: list[Span] = Field(default_factory=list)
    fields: Optional[dict[str, DocumentField]] = None
    confidence: Optional[float] = None


class ServiceWarning(ServiceModel):
    code: Optional[str] = None
    message: Optional[str] = None
    target: Optional[str] = None


class InnerError(ServiceModel):
    code: Optional[str] = None
    message: Optional[str] = None
    inner_error: Optional[InnerError] = Field(default=None, alias="innererror")


class ServiceError(ServiceModel):
    """Error object reported by the service for a failed job."""

    code: Optional[str] = None
    message: Optional[str] = None
    target: Optional[str] = None
    details: Optional[list[ServiceError]] = None
    inner_error: Optional[InnerError] = Field(default=None, alias="innererror")


class AnalyzeResult(ServiceModel):
    """The document analysis result."""

    api_version: Optional[str] = None
    model_id: Optional[str] = None
    string_index_type: Optional[str] = None
    content_format: Optional[str] = None
    content: str = ""
    pages: list[DocumentPage] = Field(default_factory=list)
    paragraphs: Optional[list[Paragraph]] = None
    tables: Optional[list[DocumentTable]] = None
    figures: Optional[list[Figure]] = None
    sections: Optional[list[Section]] = None
    key_value_pairs: Optional[list[KeyValuePair]] = None
    styles: Optional[list[Style]] = None
    languages: Optional[list[Language]] = None
    documents: Optional[list[AnalyzedDocument]] = None
    warnings: Optional[list[ServiceWarning]] = None


class AnalyzeOperationResult(ServiceModel):
    """Status envelope returned when polling an analyze operation."""

    status: Optional[str] = None
    created_date_time: Optional[str] = None
    last_updated_date_time: Optional[str] = None
    error: Optional[ServiceError] = None
    analyze_result: Optional[AnalyzeResult] = None


class AnalysisOutcome:
    """Succeeded status envelope exactly as the service returned it.

    The decoded JSON is held as-is and never re-serialized through the
    schema models. ``envelope()`` and ``analyze_result`` parse a typed view
    on demand.
    """

    def __init__(self, payload: dict[str, Any]) -> None:
        self._payload = payload

    @property
    def status(self) -> str | None:
        return self._payload.get("status")

    def envelope(self) -> AnalyzeOperationResult:
        return AnalyzeOperationResult.model_validate(self._payload)

    @property
    def analyze_result(self) -> AnalyzeResult | None:
        return self.envelope().analyze_result

    def to_payload(self) -> dict[str, Any]:
        """Return a copy of the service response, field for field."""
        return copy.deepcopy(self._payload)
