"""Static text and row layout of the Instructions sheet"""

SHEET_NAME = "Instructions"

TITLE_ROW = 2
SPACING_ROW = 3
INTRO_ROW = 4
GET_STARTED_ROW = 6
DEPENDENT_CELLS_ROW = 12
FAQ_ROW = 18

TITLE = "Instructions"

INTRO = {
    "title": "Introduction",
    "description": (
        "The following set of high-level questions are intended to provide insight to the CRDC, "
        "related to data storage, access, secondary sharing needs and other requirements of data "
        "submitters."
    ),
}

GET_STARTED = {
    "title": "Get Started",
    "description": (
        "Consult the table below for guidance on the required entry format for each field type. "
        "It explains where and how to provide values for single entries, multiple entries, and "
        "multiple records."
    ),
    "table": [
        ("Single Entry", "Enter exactly one value in a single row."),
        (
            "Multiple Entries",
            'Enter multiple values in a single row, separated by a | delimiter.\n'
            '(e.g. "value1 | value2 | value3")',
        ),
        (
            "Multiple Records",
            "Enter multiple records by using a new row for each record. This does not affect "
            "adjacent columns; Single Entry fields will remain as a single row.",
        ),
    ],
}

DEPENDENT_CELLS = {
    "title": "Dependent Cells",
    "descriptions": [
        "- Indicates a derived or dependent field. You do not need to fill it out.",
        "If you type in a blocked cell, your input will be ignored.",
        "To unblock a blocked cell, update the field(s) it depends on.",
    ],
}

FAQ = {
    "title": "Frequently Asked Questions (FAQ)",
    "questions": [
        (
            "Q: What gets ignored?",
            "- Stray values that don't match the column's entry type.\n"
            "- For Single Entry or Multiple Entry columns, anything typed outside of the second row.\n"
            "- Values within blocked cells.",
            60,
        ),
        (
            "Q: How can I tell when a field is 'Multiple Entries' or 'Multiple Records'?",
            "Hovering over the header cell will display an annotation indicating the field type. "
            "If no header annotation is present, then the field is Single Entry.",
            40,
        ),
        (
            "Q: What is the Date format?",
            "Dates should be entered in the format MM/DD/YYYY.",
            20,
        ),
        (
            "Q: Can I paste values directly into the spreadsheet fields?",
            "Pasting data into the workbook may cause dropdown menus or other features to "
            "disappear in some cells. To avoid these issues, use 'Paste Special' and select "
            "'Values', or enter your data manually.",
            60,
        ),
    ],
}
