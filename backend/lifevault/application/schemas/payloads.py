"""Pydantic payload models — one per record type, keyed by ``RecordType``.

Every field is lenient: scalars coerce to strings, list fields accept
arrays or comma/newline separated text, flags accept ``true/yes/1``, and a
nested object that is not an object falls back to its defaults. Validating
any decoded JSON value therefore always yields a complete current-shape
payload, and validating that output again is a fixed point.

Persisted JSON uses camelCase keys (``model_dump(by_alias=True)``).
"""

from typing import Annotated, Any, ClassVar, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from lifevault.application.normalizers.coerce import (
    expand_dotted_keys,
    format_timestamp,
    has_meaningful_value,
    make_id,
    now_utc,
    to_bool,
    to_optional_string,
    to_string,
    to_string_list,
)
from lifevault.domain.entities import RecordType
from lifevault.domain.exceptions import RegistryIntegrityError

# ── Lenient field types ─────────────────────────────────────────────

Text = Annotated[str, BeforeValidator(to_string)]
OptionalText = Annotated[str | None, BeforeValidator(to_optional_string)]
TextList = Annotated[list[str], BeforeValidator(to_string_list)]
Flag = Annotated[bool, BeforeValidator(to_bool)]
ActiveFlag = Annotated[bool, BeforeValidator(lambda v: to_bool(v, fallback=True))]


def _as_payload_dict(data: Any) -> dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True)
    if not isinstance(data, dict):
        return {}
    return expand_dotted_keys(data)


class PayloadModel(BaseModel):
    """Base for payloads and their nested objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _coerce_container(cls, data: Any) -> Any:
        return _as_payload_dict(data)


class ListItem(PayloadModel):
    """A row in an object-list field; gets an id and timestamps on first save."""

    id_prefix: ClassVar[str] = "item"
    bookkeeping_fields: ClassVar[frozenset[str]] = frozenset({"id", "created_at", "updated_at", "is_active"})

    id: Text = ""
    created_at: Text = ""
    updated_at: Text = ""
    is_active: ActiveFlag = True

    @model_validator(mode="before")
    @classmethod
    def _coerce_container(cls, data: Any) -> Any:
        row = _as_payload_dict(data)
        if not to_string(row.get("id")).strip():
            row["id"] = make_id(cls.id_prefix)
        created = to_string(row.get("createdAt")).strip()
        if not created:
            created = format_timestamp(now_utc())
            row["createdAt"] = created
        if not to_string(row.get("updatedAt")).strip():
            row["updatedAt"] = created
        return row

    def is_blank(self) -> bool:
        """True when no content field differs from its default."""
        for name, info in type(self).model_fields.items():
            if name in self.bookkeeping_fields:
                continue
            value = getattr(self, name)
            if value == info.get_default(call_default_factory=True):
                continue
            if has_meaningful_value(value):
                return False
        return True


def _coerce_rows(value: Any) -> list[Any]:
    if isinstance(value, list):
        return [row for row in value if isinstance(row, (dict, BaseModel))]
    if isinstance(value, (dict, BaseModel)):
        return [value]
    return []


def _drop_blank_rows(rows: list[ListItem]) -> list[ListItem]:
    return [row for row in rows if not row.is_blank()]


ItemT = TypeVar("ItemT", bound=ListItem)
Rows = Annotated[list[ItemT], BeforeValidator(_coerce_rows), AfterValidator(_drop_blank_rows)]


# ── Nested objects ──────────────────────────────────────────────────

class StreetAddress(PayloadModel):
    line1: Text = ""
    line2: Text = ""
    city: Text = ""
    state: Text = ""
    postal_code: Text = ""
    country: Text = ""


class SchoolAddress(PayloadModel):
    line1: Text = ""
    city: Text = ""
    state: Text = ""
    postal_code: Text = ""
    country: Text = ""


class BirthPlace(PayloadModel):
    city: Text = ""
    county: Text = ""
    state: Text = ""
    country: Text = ""


class BirthParents(PayloadModel):
    include_parents: Flag = False
    parent1_name: OptionalText = None
    parent2_name: OptionalText = None


class RxCoverage(PayloadModel):
    bin: Text = ""
    pcn: Text = ""
    rx_group: Text = ""


class CrisisPlan(PayloadModel):
    warning_signs: TextList = Field(default_factory=list)
    preferred_actions: TextList = Field(default_factory=list)
    emergency_contact_ids: TextList = Field(default_factory=list)
    provider_to_contact_first_id: Text = ""
    notes: Text = ""


# ── Object-list rows ────────────────────────────────────────────────

class HealthEntryItem(ListItem):
    id_prefix: ClassVar[str] = "health"

    label: Text = ""
    severity: Text = ""
    notes: Text = ""


class ProcedureItem(ListItem):
    id_prefix: ClassVar[str] = "procedures"

    procedure_name: Text = ""
    month_year: Text = ""
    reason_notes: Text = ""
    provider_or_hospital: Text = ""
    complications: Text = ""


class PrescriptionItem(ListItem):
    id_prefix: ClassVar[str] = "prescriptions"

    medication_name: Text = ""
    dosage: Text = ""
    frequency: Text = ""
    indication: Text = ""
    prescribing_provider_contact_id: Text = ""
    pharmacy_contact_id: Text = ""
    start_date: Text = ""
    end_date: OptionalText = None
    discontinued: Flag = False
    notes: Text = ""
    privacy: Text = "STANDARD"


class VaccinationItem(ListItem):
    id_prefix: ClassVar[str] = "vaccinations"

    vaccine_name: Text = ""
    dose_number: Text = ""
    date_administered: Text = ""
    expiration_date: OptionalText = None
    provider_contact_id: Text = ""
    notes: Text = ""


class MentalHealthProviderItem(ListItem):
    id_prefix: ClassVar[str] = "mentalhealthproviders"

    contact_id: Text = ""
    specialty: Text = ""
    notes: Text = ""


class MentalHealthMedItem(ListItem):
    id_prefix: ClassVar[str] = "mentalhealthmeds"

    medication_name: Text = ""
    dosage: Text = ""
    frequency: Text = ""
    start_date: Text = ""
    end_date: OptionalText = None
    notes: Text = ""


class StressorItem(ListItem):
    id_prefix: ClassVar[str] = "stressors"

    title: Text = ""
    category: Text = ""
    severity: Text = ""
    notes: Text = ""


class CopingStrategyItem(ListItem):
    id_prefix: ClassVar[str] = "copingstrategies"

    title: Text = ""
    when_to_use: Text = ""
    helpful_contact_id: OptionalText = None
    notes: Text = ""


class PrivateNoteItem(ListItem):
    id_prefix: ClassVar[str] = "privatenotes"

    note: Text = ""


class PickupContactItem(ListItem):
    id_prefix: ClassVar[str] = "authorizedpickup"

    contact_id: Text = ""
    relationship: Text = ""
    notes: Text = ""
    rules: TextList = Field(default_factory=list)


class ClothingSizeItem(ListItem):
    id_prefix: ClassVar[str] = "clothingsizes"

    label: Text = ""
    brand: Text = ""
    notes: Text = ""
    effective_date: Text = ""


class ShoeSizeItem(ListItem):
    id_prefix: ClassVar[str] = "shoesizes"

    label: Text = ""
    category: Text = ""
    system: Text = ""
    width: Text = ""
    brand: Text = ""
    notes: Text = ""
    effective_date: Text = ""


class TravelIdItem(ListItem):
    id_prefix: ClassVar[str] = "travelids"

    type: Text = ""
    other_program_name: Text = ""
    number: Text = ""
    expiration_date: OptionalText = None
    login_email: Text = ""
    notes: Text = ""


class LoyaltyAccountItem(ListItem):
    id_prefix: ClassVar[str] = "accounts"

    program_type: Text = ""
    provider_name: Text = ""
    member_number: Text = ""
    login_email_or_username: Text = ""
    status_tier: Text = ""
    notes: Text = ""


# ── Payloads ────────────────────────────────────────────────────────

class DriversLicensePayload(PayloadModel):
    full_name: Text = ""
    dl_number: Text = ""
    date_of_birth: Text = ""
    expiration_date: OptionalText = None
    issue_date: Text = ""
    address: StreetAddress = Field(default_factory=StreetAddress)
    license_class: Text = ""
    restrictions: TextList = Field(default_factory=list)
    issuing_region: Text = ""


class BirthCertificatePayload(PayloadModel):
    child_full_name: Text = ""
    date_of_birth: Text = ""
    place_of_birth: BirthPlace = Field(default_factory=BirthPlace)
    certificate_number: Text = ""
    parents: BirthParents = Field(default_factory=BirthParents)


class SocialSecurityCardPayload(PayloadModel):
    full_name: Text = ""
    ssn: Text = ""


class InsurancePolicyPayload(PayloadModel):
    insurance_type: Text = ""
    insurer_name: Text = ""
    member_name: Text = ""
    member_id: Text = ""
    group_number: Text = ""
    plan_name: Text = ""
    rx: RxCoverage = Field(default_factory=RxCoverage)
    customer_service_phone: Text = ""
    website: Text = ""
    effective_date: Text = ""
    notes: Text = ""


class MedicalProfilePayload(PayloadModel):
    blood_type: Text = ""
    allergies: Rows[HealthEntryItem] = Field(default_factory=list)
    conditions: Rows[HealthEntryItem] = Field(default_factory=list)
    notes: Text = ""


class MedicalProceduresPayload(PayloadModel):
    procedures: Rows[ProcedureItem] = Field(default_factory=list)


class PrescriptionsPayload(PayloadModel):
    prescriptions: Rows[PrescriptionItem] = Field(default_factory=list)


class VaccinationsPayload(PayloadModel):
    vaccinations: Rows[VaccinationItem] = Field(default_factory=list)


class VisionPrescriptionPayload(PayloadModel):
    rx_date: Text = ""
    doctor_contact_id: Text = ""
    notes: Text = ""


class PrivateHealthProfilePayload(PayloadModel):
    privacy_enforced: Flag = True
    mental_health_providers: Rows[MentalHealthProviderItem] = Field(default_factory=list)
    mental_health_meds: Rows[MentalHealthMedItem] = Field(default_factory=list)
    stressors: Rows[StressorItem] = Field(default_factory=list)
    coping_strategies: Rows[CopingStrategyItem] = Field(default_factory=list)
    crisis_plan: CrisisPlan = Field(default_factory=CrisisPlan)
    private_notes: Rows[PrivateNoteItem] = Field(default_factory=list)


class SchoolInfoPayload(PayloadModel):
    school_name: Text = ""
    address: SchoolAddress = Field(default_factory=SchoolAddress)
    main_office_phone: Text = ""
    nurse_contact_id: Text = ""
    counselor_contact_id: Text = ""
    notes: Text = ""


class AuthorizedPickupPayload(PayloadModel):
    authorized_pickup: Rows[PickupContactItem] = Field(default_factory=list)


class EducationRecordPayload(PayloadModel):
    title: Text = ""
    school_name: Text = ""
    grade_or_level: Text = ""
    year: Text = ""


class PreferencesPayload(PayloadModel):
    likes: TextList = Field(default_factory=list)
    dislikes: TextList = Field(default_factory=list)
    hobbies: TextList = Field(default_factory=list)
    favorite_sports: TextList = Field(default_factory=list)
    favorite_colors: TextList = Field(default_factory=list)


class SizesPayload(PayloadModel):
    clothing_sizes: Rows[ClothingSizeItem] = Field(default_factory=list)
    shoe_sizes: Rows[ShoeSizeItem] = Field(default_factory=list)


class PassportPayload(PayloadModel):
    first_name: Text = ""
    middle_name: Text = ""
    last_name: Text = ""
    passport_number: Text = ""
    nationality: Text = ""
    date_of_birth: Text = ""
    sex: Text = ""
    place_of_birth: Text = ""
    issue_date: Text = ""
    expiration_date: OptionalText = None
    issuing_country: Text = ""
    issuing_authority: Text = ""
    mrz_raw: Text = ""


class PassportCardPayload(PayloadModel):
    full_name: Text = ""
    passport_card_number: Text = ""
    date_of_birth: Text = ""
    expiration_date: OptionalText = None
    issuing_country: Text = ""
    mrz_raw: Text = ""


class TravelIdsPayload(PayloadModel):
    travel_ids: Rows[TravelIdItem] = Field(default_factory=list)


class LoyaltyAccountsPayload(PayloadModel):
    accounts: Rows[LoyaltyAccountItem] = Field(default_factory=list)


class LegalPropertyDocumentPayload(PayloadModel):
    document_type: Text = ""
    title: Text = ""
    owner_entity_id: Text = ""
    issue_date: Text = ""
    expiration_date: OptionalText = None
    notes: Text = ""


class OtherDocumentPayload(PayloadModel):
    category: Text = ""
    title: Text = ""
    notes: Text = ""


class PetProfilePayload(PayloadModel):
    kind: Text = ""
    breed: Text = ""
    dob_or_adoption_date: Text = ""
    microchip_id: Text = ""
    emergency_instructions: Text = ""
    notes: Text = ""


class PetDocumentPayload(PayloadModel):
    label: Text = ""
    document_type: Text = ""
    notes: Text = ""


class PetInsurancePayload(PayloadModel):
    provider_name: Text = ""
    policy_number: Text = ""
    member_id: Text = ""
    customer_service_phone: Text = ""
    notes: Text = ""


PAYLOAD_MODELS: dict[RecordType, type[PayloadModel]] = {
    RecordType.DRIVERS_LICENSE: DriversLicensePayload,
    RecordType.BIRTH_CERTIFICATE: BirthCertificatePayload,
    RecordType.SOCIAL_SECURITY_CARD: SocialSecurityCardPayload,
    RecordType.INSURANCE_POLICY: InsurancePolicyPayload,
    RecordType.MEDICAL_PROFILE: MedicalProfilePayload,
    RecordType.MEDICAL_PROCEDURES: MedicalProceduresPayload,
    RecordType.PRESCRIPTIONS: PrescriptionsPayload,
    RecordType.VACCINATIONS: VaccinationsPayload,
    RecordType.VISION_PRESCRIPTION: VisionPrescriptionPayload,
    RecordType.PRIVATE_HEALTH_PROFILE: PrivateHealthProfilePayload,
    RecordType.SCHOOL_INFO: SchoolInfoPayload,
    RecordType.AUTHORIZED_PICKUP: AuthorizedPickupPayload,
    RecordType.EDUCATION_RECORD: EducationRecordPayload,
    RecordType.PREFERENCES: PreferencesPayload,
    RecordType.SIZES: SizesPayload,
    RecordType.PASSPORT: PassportPayload,
    RecordType.PASSPORT_CARD: PassportCardPayload,
    RecordType.TRAVEL_IDS: TravelIdsPayload,
    RecordType.LOYALTY_ACCOUNTS: LoyaltyAccountsPayload,
    RecordType.LEGAL_PROPERTY_DOCUMENT: LegalPropertyDocumentPayload,
    RecordType.OTHER_DOCUMENT: OtherDocumentPayload,
    RecordType.PET_PROFILE: PetProfilePayload,
    RecordType.PET_DOCUMENT: PetDocumentPayload,
    RecordType.PET_INSURANCE: PetInsurancePayload,
}

_missing = [t.value for t in RecordType if t not in PAYLOAD_MODELS]
if _missing:
    raise RegistryIntegrityError(f"Record types without payload model: {', '.join(_missing)}")


def payload_model_for(record_type: RecordType) -> type[PayloadModel]:
    return PAYLOAD_MODELS[record_type]
