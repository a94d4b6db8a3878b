"""PI and Contact section"""

import logging
from typing import Any, Dict, Optional, Set

from openpyxl.worksheet.worksheet import Worksheet

from core.enums import LookupKind, SectionId, ValidationKind
from core.error_catalog import ErrorCatalog
from core.interfaces import ColumnValues, LookupData
from core.models import Contact, ValidationRule
from utils.formulas import AND, EMAIL, IF, ORCID, REQUIRED, STR_EQ, TEXT_MAX
from utils.values import first, from_yes_no, to_yes_no
from ..engine import START_ROW, SectionContext, SectionSpec
from ..mapping import records, scalar
from ..options import YES_NO_LIST
from .columns import (
    ADDITIONAL_CONTACT_FIELDS, CHARACTER_LIMITS, COLUMNS, PRIMARY_CONTACT_KEYS, SHEET_NAME,
)

logger = logging.getLogger(__name__)


def _contact_values(prefix: str, contact: Contact) -> Dict[str, Any]:
    return {
        f"{prefix}.firstName": contact.first_name,
        f"{prefix}.lastName": contact.last_name,
        f"{prefix}.position": contact.position,
        f"{prefix}.email": contact.email,
        f"{prefix}.institution": contact.institution,
        f"{prefix}.phone": contact.phone,
    }


def write(ctx: SectionContext, ws: Worksheet) -> Set[int]:
    section = ctx.section
    data = ctx.data
    pi = data.pi

    primary = Contact() if data.pi_as_primary_contact else (data.primary_contact or Contact())
    values = {
        "pi.firstName": pi.first_name,
        "pi.lastName": pi.last_name,
        "pi.position": pi.position,
        "pi.email": pi.email,
        "pi.ORCID": pi.orcid,
        "pi.institution": pi.institution,
        "pi.address": pi.address,
        "piAsPrimaryContact": to_yes_no(data.pi_as_primary_contact),
    }
    values.update(_contact_values("primaryContact", primary))

    rows = {section.set_row_values(ws, START_ROW, values)}
    rows |= section.write_records(
        ws, data.additional_contacts, lambda c: _contact_values("additionalContacts", c)
    )
    return rows


def validate(ctx: SectionContext, ws: Worksheet) -> None:
    section = ctx.section
    same_as_pi = section.cell(ws, "piAsPrimaryContact")
    institutions = ctx.lookups.list_formula(LookupKind.INSTITUTIONS)

    def required_text(key: str):
        limit = section.limit(key)
        return lambda address: ValidationRule(
            kind=ValidationKind.CUSTOM,
            formula1=AND(REQUIRED(address), TEXT_MAX(address, limit)),
            error=ErrorCatalog.get("requiredMax", max=limit),
        )

    def unless_same_as_pi(formula, error: str):
        return lambda address: ValidationRule(
            kind=ValidationKind.CUSTOM,
            formula1=IF(STR_EQ(same_as_pi, "Yes"), "TRUE", formula(address)),
            error=error,
        )

    institution_rule = ValidationRule(
        kind=ValidationKind.LIST,
        formula1=institutions,
        error=ErrorCatalog.get("fromDropdown", label="an institution"),
        allow_blank=True,
        strict=False,
    )

    # Principal investigator
    for key in ("pi.firstName", "pi.lastName", "pi.position", "pi.address"):
        section.add_cell_rules(ws, key, [START_ROW], required_text(key))
    section.add_cell_rules(
        ws,
        "pi.email",
        [START_ROW],
        lambda address: ValidationRule(
            kind=ValidationKind.CUSTOM, formula1=EMAIL(address), error=ErrorCatalog.get("email")
        ),
    )
    section.add_cell_rules(
        ws,
        "pi.ORCID",
        [START_ROW],
        lambda address: ValidationRule(
            kind=ValidationKind.CUSTOM,
            formula1=ORCID(address),
            error=ErrorCatalog.get("orcid"),
            allow_blank=True,
        ),
    )
    section.add_rule(ws, section.column_range("pi.institution"), institution_rule)
    section.add_rule(
        ws,
        same_as_pi.coordinate,
        ValidationRule(
            kind=ValidationKind.LIST, formula1=YES_NO_LIST, error=ErrorCatalog.get("yesNo")
        ),
    )

    # Primary contact, skipped when the PI is the primary contact
    for key in ("primaryContact.firstName", "primaryContact.lastName", "primaryContact.position"):
        limit = section.limit(key)
        section.add_cell_rules(
            ws,
            key,
            [START_ROW],
            unless_same_as_pi(
                lambda address, limit=limit: AND(REQUIRED(address), TEXT_MAX(address, limit)),
                ErrorCatalog.get("requiredMax", max=limit),
            ),
        )
    section.add_cell_rules(
        ws,
        "primaryContact.email",
        [START_ROW],
        unless_same_as_pi(EMAIL, ErrorCatalog.get("email")),
    )
    phone_limit = section.limit("primaryContact.phone")
    section.add_cell_rules(
        ws,
        "primaryContact.phone",
        [START_ROW],
        unless_same_as_pi(
            lambda address: AND(REQUIRED(address), TEXT_MAX(address, phone_limit)),
            ErrorCatalog.get("phone", max=phone_limit),
        ),
    )
    section.add_rule(ws, section.column_range("primaryContact.institution"), institution_rule)

    first_key, last_key = PRIMARY_CONTACT_KEYS[0], PRIMARY_CONTACT_KEYS[-1]
    blocked = f"{section.letter(first_key)}{START_ROW}:{section.letter(last_key)}{START_ROW}"
    section.black_out(ws, blocked, STR_EQ(same_as_pi, "Yes"))

    # Additional contacts
    rows = section.validation_rows()
    for key in (
        "additionalContacts.firstName",
        "additionalContacts.lastName",
        "additionalContacts.position",
        "additionalContacts.phone",
    ):
        section.add_rule(ws, section.column_range(key, rows), section.text_limit_rule(key))
    section.add_cell_rules(
        ws,
        "additionalContacts.email",
        rows,
        lambda address: ValidationRule(
            kind=ValidationKind.CUSTOM,
            formula1=EMAIL(address),
            error=ErrorCatalog.get("email"),
            allow_blank=True,
        ),
    )
    section.add_rule(
        ws, section.column_range("additionalContacts.institution", rows), institution_rule
    )


def _resolve_institution(name: str, lookups: LookupData) -> str:
    if not name:
        return ""
    institution_id = lookups.institutions.get(name, "")
    if not institution_id:
        logger.info("No institution ID found for '%s', keeping the name only.", name)
    return institution_id


def _contact(values: ColumnValues, prefix: str, lookups: LookupData) -> Optional[Dict[str, Any]]:
    contact = {
        field: scalar(values, f"{prefix}.{field}", CHARACTER_LIMITS.get(f"{prefix}.{field}"))
        for field in ("firstName", "lastName", "position", "email", "institution", "phone")
    }
    if not any(contact.values()):
        return None
    contact["institutionID"] = _resolve_institution(contact["institution"], lookups)
    return contact


def map_values(values: ColumnValues, lookups: LookupData) -> Dict[str, Any]:
    pi = {
        "firstName": scalar(values, "pi.firstName", CHARACTER_LIMITS["pi.firstName"]),
        "lastName": scalar(values, "pi.lastName", CHARACTER_LIMITS["pi.lastName"]),
        "position": scalar(values, "pi.position", CHARACTER_LIMITS["pi.position"]),
        "email": scalar(values, "pi.email", CHARACTER_LIMITS["pi.email"]),
        "ORCID": scalar(values, "pi.ORCID"),
        "institution": scalar(values, "pi.institution", CHARACTER_LIMITS["pi.institution"]),
        "address": scalar(values, "pi.address", CHARACTER_LIMITS["pi.address"]),
    }
    pi["institutionID"] = _resolve_institution(pi["institution"], lookups)

    pi_as_primary_contact = from_yes_no(first(values.get("piAsPrimaryContact"))) is True

    additional = records(values, ADDITIONAL_CONTACT_FIELDS, CHARACTER_LIMITS)
    for contact in additional:
        contact["institutionID"] = _resolve_institution(contact["institution"], lookups)

    primary_contact = None
    if not pi_as_primary_contact:
        primary_contact = _contact(values, "primaryContact", lookups)

    return {
        "pi": pi,
        "piAsPrimaryContact": pi_as_primary_contact,
        "primaryContact": primary_contact,
        "additionalContacts": additional,
    }


SECTION_A = SectionSpec(
    id=SectionId.A,
    sheet_name=SHEET_NAME,
    columns=COLUMNS,
    character_limits=CHARACTER_LIMITS,
    lookups=(LookupKind.INSTITUTIONS,),
    write=write,
    validate=validate,
    map_values=map_values,
)
