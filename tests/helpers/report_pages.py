"""Builders for SmartCredit 3B report markup.

Each helper returns an HTML fragment laid out the way the live classic
3B report renders it; ``report_page`` stitches the fragments together.
"""

from typing import Dict, Iterable, List, Optional, Sequence

BUREAU_LABELS = ("TransUnion", "Experian", "Equifax")

PERSONAL_LABELS = (
    "Credit Report Date:",
    "Name:",
    "Date of Birth:",
    "Current Address(es):",
    "Previous Address(es):",
    "Employers:",
)

PERSONAL_VALUES: Dict[str, List[str]] = {
    "transunion": ["12/10/2025", "JOHN DOE", "1980", "123 MAIN ST", "--", "ACME CORP"],
    "experian": ["12/10/2025", "JOHN Q DOE", "1980", "123 MAIN ST", "9 OLD RD", ""],
    "equifax": ["12/09/2025", "JOHN DOE", "", "123 MAIN ST", "--", "ACME CORP"],
}

SUMMARY_LABELS = (
    "Total Accounts:",
    "Open Accounts:",
    "Closed Accounts:",
    "Delinquent:",
    "Derogatory:",
    "Balances:",
    "Payments:",
    "Public Records:",
    "Inquiries(2 years):",
)

SUMMARY_VALUES: Dict[str, List[str]] = {
    "transunion": ["12", "5", "7", "0", "1", "$12,345.00", "$450.00", "0", "2"],
    "experian": ["11", "4", "7", "0", "0", "$11,000.00", "$400.00", "1", "3"],
    "equifax": ["10", "5", "5", "1", "0", "$9,876.50", "$380.00", "0", "1"],
}

ACCOUNT_LABELS = (
    "Account #:",
    "High Balance:",
    "Last Verified:",
    "Date of Last Activity:",
    "Date Reported:",
    "Date Opened:",
    "Balance Owed:",
    "Closed Date:",
    "Account Rating:",
    "Account Description:",
    "Dispute Status:",
    "Creditor Type:",
    "Account Status:",
    "Payment Status:",
    "Creditor Remarks:",
    "Payment Amount:",
    "Last Payment:",
    "Term Length:",
    "Past Due Amount:",
    "Account Type:",
    "Payment Frequency:",
    "Credit Limit:",
)

ACCOUNT_VALUES = [
    "****1234",
    "$5,000.00",
    "11/30/2025",
    "11/15/2025",
    "12/1/2025",
    "1/5/2015",
    "$1,234.00",
    "-",
    "Open",
    "Individual",
    "Account not disputed",
    "Bank Credit Cards",
    "Open",
    "Current",
    "N/A",
    "$35.00",
    "11/20/2025",
    "--",
    "$0.00",
    "Revolving",
    "Monthly",
    "$5,000.00",
]

DEFAULT_MONTHS = (("Jan", "OK", "C"), ("Feb", "30", "1"), ("Mar", "", "U"))

DEFAULT_DAYS_LATE = (("0", "1", ""), ("2", "0", "0"), ("", "", ""))

DEFAULT_INQUIRIES = (
    ("CAPITAL ONE", "10/02/2025", "TransUnion"),
    ("", "09/15/2025", "Experian"),
    ("CHASE CARD", "08/01/2025", "Equifax"),
)

DEFAULT_CONTACTS = (
    ("CAPITAL ONE", "(800) 955-7070", "PO BOX 30285 SALT LAKE CITY UT", ""),
    ("", "", "", ""),
    ("CHASE CARD", "(800) 945-2000", "PO BOX 15298 WILMINGTON DE", "help@chase.example"),
)


def cells(values: Iterable[str]) -> str:
    return "".join(f'<p class="grid-cell">{v}</p>' for v in values)


def bureau_grid(
    labels: Sequence[str],
    columns: Sequence[Sequence[str]],
    *,
    column_class: str = "d-contents",
) -> str:
    """A 4-column grid: label column then one column per bureau in ``columns``."""

    parts = [f'<div class="{column_class}">{cells(["", *labels])}</div>']
    for label, values in zip(BUREAU_LABELS, columns):
        parts.append(f'<div class="{column_class}">{cells([label, *values])}</div>')
    return f'<div class="d-grid grid-cols-4">{"".join(parts)}</div>'


def section(heading: Optional[str], body: str) -> str:
    title = f"<h5>{heading}</h5>" if heading is not None else ""
    return f'<section class="mt-5">{title}{body}</section>'


def scores_block(values: Sequence[str] = ("770", "765", "781")) -> str:
    inner = "".join(f"<h5>{v}</h5>" for v in values)
    return f'<section class="credit-score-3">{inner}</section>'


def personal_info_section(heading: Optional[str] = "Personal Information") -> str:
    columns = [PERSONAL_VALUES[b] for b in ("transunion", "experian", "equifax")]
    return section(heading, bureau_grid(PERSONAL_LABELS, columns))


def summary_section(heading: Optional[str] = "Summary") -> str:
    columns = [SUMMARY_VALUES[b] for b in ("transunion", "experian", "equifax")]
    return section(heading, bureau_grid(SUMMARY_LABELS, columns))


def payment_history_block(
    months: Sequence[Sequence[str]] = DEFAULT_MONTHS, *, bureaus: int = 3
) -> str:
    month_html = "".join(
        f'<div class="status-{cls}"><p class="month-badge">{badge}</p>'
        f'<p class="month-label">{label}</p></div>'
        for label, badge, cls in months
    )
    blocks = "".join(
        f'<div class="d-flex flex-wrap payment-history"><p class="bureau">{label}</p>'
        f'<div class="d-flex gap-1 flex-wrap flex-1">{month_html}</div></div>'
        for label in BUREAU_LABELS[:bureaus]
    )
    return f'<div class="mt-3 p-1 fs-12"><p>Two-Year Payment History</p>{blocks}</div>'


def days_late_block(
    values: Sequence[Sequence[str]] = DEFAULT_DAYS_LATE,
    *,
    without_values: Optional[int] = None,
    bureaus: int = 3,
) -> str:
    columns = []
    for idx, label in enumerate(BUREAU_LABELS[:bureaus]):
        inner = ""
        if idx != without_values:
            spans = "".join(f"<p><span>{v}</span></p>" for v in values[idx])
            inner = f'<div class="d-grid grid-cols-3 bg-gray-100 text-center py-1">{spans}</div>'
        columns.append(
            f'<div class="border-right border-color-gray-600"><p>{label}</p>{inner}</div>'
        )
    return (
        "<div><p>Days Late - 7 Year History</p>"
        f'<div class="d-grid grid-cols-3">{"".join(columns)}</div></div>'
    )


def account_block(
    name: Optional[str],
    values: Sequence[str] = ACCOUNT_VALUES,
    *,
    grid_columns: int = 3,
    with_grid: bool = True,
    payment_history: Optional[str] = None,
    days_late: Optional[str] = None,
) -> str:
    """One account container; ``grid_columns`` bureau columns are rendered."""

    name_html = f'<p class="h6"><strong>{name}</strong></p>' if name is not None else ""
    grid_html = ""
    if with_grid:
        grid_html = bureau_grid(
            ACCOUNT_LABELS,
            [list(values)] * grid_columns,
            column_class="d-contents grid-rows-23",
        )
    ph = payment_history_block() if payment_history is None else payment_history
    dl = days_late_block() if days_late is None else days_late
    return (
        '<div class="my-3 border-b border-5 border-color-gray-300">'
        f"{name_html}{grid_html}{ph}{dl}</div>"
    )


def account_history_section(
    accounts: Sequence[str], heading: Optional[str] = "Account History"
) -> str:
    return section(heading, "".join(accounts))


def default_accounts() -> List[str]:
    """Three readable accounts (the second without a usable payment history)
    followed by one container with no grid."""

    return [
        account_block("CAPITAL ONE"),
        account_block("CHASE CARD", payment_history=payment_history_block(bureaus=2)),
        account_block(None, days_late=days_late_block(without_values=1)),
        account_block("BROKEN LENDER", with_grid=False),
    ]


def inquiries_section(
    rows: Sequence[Sequence[str]] = DEFAULT_INQUIRIES, heading: str = "Inquiries"
) -> str:
    header = (
        '<div class="d-grid grid-cols-3 fs-12 bg-gray-100">'
        f'{cells(["Creditor Name", "Date of Inquiry", "Credit Bureau"])}</div>'
    )
    body = "".join(
        f'<div class="d-grid grid-cols-3 border-color-gray-100 border-b">{cells(row)}</div>'
        for row in rows
    )
    return section(heading, header + body)


def contacts_section(contacts: Sequence[Sequence[str]] = DEFAULT_CONTACTS) -> str:
    blocks = []
    for company, phone, address, email in contacts:
        blocks.append(
            '<button type="button">Show</button>'
            '<div class="creditor-contact">'
            f'<p class="company-name">{company}</p><p class="phone">{phone}</p>'
            f'<p class="address">{address}</p><p class="email">{email}</p>'
            "</div>"
        )
    return section("Creditor Contacts", '<button type="button">Hide all</button>' + "".join(blocks))


def report_page(
    *,
    scores: Optional[str] = None,
    personal: Optional[str] = None,
    summary: Optional[str] = None,
    accounts: Optional[str] = None,
    inquiries: Optional[str] = None,
    contacts: Optional[str] = None,
    extra: str = "",
) -> str:
    """Full classic 3B page; pass ``""`` for a part to leave it out."""

    parts = [
        scores_block() if scores is None else scores,
        personal_info_section() if personal is None else personal,
        summary_section() if summary is None else summary,
        account_history_section(default_accounts()) if accounts is None else accounts,
        inquiries_section() if inquiries is None else inquiries,
        contacts_section() if contacts is None else contacts,
        extra,
    ]
    return f"<html><body><main>{''.join(parts)}</main></body></html>"
