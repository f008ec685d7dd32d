# biztime/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, Text, Boolean,
    Numeric, Date, ForeignKey, CheckConstraint, PrimaryKeyConstraint,
    false, text,
)

metadata = MetaData()

companies = Table(
    "companies",
    metadata,
    Column("code", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("description", Text, nullable=True),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "comp_code",
        Text,
        ForeignKey("companies.code", ondelete="CASCADE"),
        nullable=False,
    ),
    # floats out, so amounts serialize as JSON numbers
    Column("amt", Numeric(12, 2, asdecimal=False), nullable=False),
    Column("paid", Boolean, nullable=False, server_default=false()),
    Column("add_date", Date, nullable=False, server_default=text("CURRENT_DATE")),
    Column("paid_date", Date, nullable=True),
    CheckConstraint("amt > 0", name="ck_invoices_amt_positive"),
)

industries = Table(
    "industries",
    metadata,
    Column("code", Text, primary_key=True),
    Column("industry", Text, nullable=False),
)

company_industries = Table(
    "company_industries",
    metadata,
    Column(
        "company_code",
        Text,
        ForeignKey("companies.code", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "industry_code",
        Text,
        ForeignKey("industries.code", ondelete="CASCADE"),
        nullable=False,
    ),
    PrimaryKeyConstraint("company_code", "industry_code"),
)
