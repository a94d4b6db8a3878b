"""Column schema for the PI and Contact sheet"""

from core.models import ColumnDef

SHEET_NAME = "PI and Contact"

_REPEAT_NOTE = (
    "If there is more than one entry, you may use additional rows for the details of each entry."
)

COLUMNS = (
    ColumnDef(key="pi.firstName", header="Principal Investigator First name", width=28),
    ColumnDef(key="pi.lastName", header="Principal Investigator Last name", width=28),
    ColumnDef(key="pi.position", header="Principal Investigator Position", width=25),
    ColumnDef(key="pi.email", header="Principal Investigator Email", width=30),
    ColumnDef(
        key="pi.ORCID",
        header="Principal Investigator ORCID",
        width=30,
        annotation="Format: 0000-0000-0000-0000. The last character may be an X.",
    ),
    ColumnDef(
        key="pi.institution",
        header="Principal Investigator Institution",
        width=30,
        annotation="Select an institution from the list or type a new one.",
    ),
    ColumnDef(key="pi.address", header="Principal Investigator Institution Address", width=35),
    ColumnDef(
        key="piAsPrimaryContact",
        header="Primary Contact Same as Principal Investigator",
        width=40,
        annotation="Select 'Yes' to skip the Primary Contact columns.",
    ),
    ColumnDef(key="primaryContact.firstName", header="Primary Contact First name", width=25),
    ColumnDef(key="primaryContact.lastName", header="Primary Contact Last name", width=25),
    ColumnDef(key="primaryContact.position", header="Primary Contact Position", width=23),
    ColumnDef(key="primaryContact.email", header="Primary Contact Email", width=30),
    ColumnDef(key="primaryContact.institution", header="Primary Contact Institution", width=30),
    ColumnDef(key="primaryContact.phone", header="Primary Contact Phone number", width=30),
    ColumnDef(
        key="additionalContacts.firstName",
        header="Additional Contact(s) First name",
        width=25,
        annotation=_REPEAT_NOTE,
    ),
    ColumnDef(key="additionalContacts.lastName", header="Additional Contact(s) Last name", width=25),
    ColumnDef(key="additionalContacts.position", header="Additional Contact(s) Position", width=25),
    ColumnDef(key="additionalContacts.email", header="Additional Contact(s) Email", width=30),
    ColumnDef(
        key="additionalContacts.institution", header="Additional Contact(s) Institution", width=30
    ),
    ColumnDef(key="additionalContacts.phone", header="Additional Contact(s) Phone number", width=30),
)

CHARACTER_LIMITS = {
    "pi.firstName": 50,
    "pi.lastName": 50,
    "pi.position": 100,
    "pi.email": 100,
    "pi.institution": 100,
    "pi.address": 200,
    "primaryContact.firstName": 50,
    "primaryContact.lastName": 50,
    "primaryContact.position": 100,
    "primaryContact.email": 100,
    "primaryContact.institution": 100,
    "primaryContact.phone": 25,
    "additionalContacts.firstName": 50,
    "additionalContacts.lastName": 50,
    "additionalContacts.position": 100,
    "additionalContacts.email": 100,
    "additionalContacts.institution": 100,
    "additionalContacts.phone": 25,
}

# Contact columns blocked out when the PI is also the primary contact
PRIMARY_CONTACT_KEYS = (
    "primaryContact.firstName",
    "primaryContact.lastName",
    "primaryContact.position",
    "primaryContact.email",
    "primaryContact.institution",
    "primaryContact.phone",
)

ADDITIONAL_CONTACT_FIELDS = {
    "additionalContacts.firstName": "firstName",
    "additionalContacts.lastName": "lastName",
    "additionalContacts.position": "position",
    "additionalContacts.email": "email",
    "additionalContacts.institution": "institution",
    "additionalContacts.phone": "phone",
}
