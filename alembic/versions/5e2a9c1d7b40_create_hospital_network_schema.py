"""create hospital network schema

Revision ID: 5e2a9c1d7b40
Revises:
Create Date: 2025-09-24 18:12:40.512093

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5e2a9c1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MYSQL_OPTS = dict(mysql_engine="InnoDB", mysql_charset="utf8mb4", mysql_collate="utf8mb4_unicode_ci")

# índices de FK (mismos nombres que genera index=True en los modelos)
FK_INDEXES = [
    ("doctors", "clinic_id"),
    ("services", "clinic_id"),
    ("appointments", "patient_id"),
    ("appointments", "doctor_id"),
    ("appointments", "clinic_id"),
    ("payments", "appointment_id"),
    ("prescriptions", "appointment_id"),
    ("prescriptions", "patient_id"),
    ("prescriptions", "doctor_id"),
    ("medical_records", "patient_id"),
    ("medical_records", "appointment_id"),
]


def _fk(target: str, ondelete: str) -> sa.ForeignKey:
    return sa.ForeignKey(target, ondelete=ondelete, onupdate="CASCADE")


def upgrade() -> None:
    op.create_table(
        "clinics",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("email", sa.String(100), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.current_timestamp(), nullable=False),
        **MYSQL_OPTS,
    )
    op.create_table(
        "specialties",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        **MYSQL_OPTS,
    )
    op.create_table(
        "doctors",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("clinic_id", sa.Integer(), _fk("clinics.id", "CASCADE"), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("email", sa.String(100), nullable=True, unique=True),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.current_timestamp(), nullable=False),
        **MYSQL_OPTS,
    )
    op.create_table(
        "doctor_specialties",
        sa.Column("doctor_id", sa.Integer(), _fk("doctors.id", "CASCADE"), primary_key=True),
        sa.Column("specialty_id", sa.Integer(), _fk("specialties.id", "CASCADE"), primary_key=True),
        **MYSQL_OPTS,
    )
    op.create_index("ix_doctor_specialty_specialty", "doctor_specialties", ["specialty_id"])
    op.create_table(
        "patients",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("email", sa.String(100), nullable=True, unique=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.current_timestamp(), nullable=False),
        **MYSQL_OPTS,
    )
    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("patient_id", sa.Integer(), _fk("patients.id", "CASCADE"), nullable=False),
        sa.Column("doctor_id", sa.Integer(), _fk("doctors.id", "CASCADE"), nullable=False),
        sa.Column("clinic_id", sa.Integer(), _fk("clinics.id", "CASCADE"), nullable=False),
        sa.Column("appointment_date", sa.DateTime(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("Scheduled", "Completed", "Cancelled", name="appointment_status"),
            server_default="Scheduled",
            nullable=True,
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.current_timestamp(), nullable=False),
        **MYSQL_OPTS,
    )
    op.create_table(
        "services",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("clinic_id", sa.Integer(), _fk("clinics.id", "CASCADE"), nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), server_default="30", nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        **MYSQL_OPTS,
    )
    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("appointment_id", sa.Integer(), _fk("appointments.id", "CASCADE"), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("payment_date", sa.TIMESTAMP(), server_default=sa.func.current_timestamp(), nullable=False),
        sa.Column(
            "method",
            sa.Enum("Cash", "Card", "Transfer", "Insurance", name="payment_method"),
            nullable=False,
        ),
        **MYSQL_OPTS,
    )
    op.create_table(
        "prescriptions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("appointment_id", sa.Integer(), _fk("appointments.id", "CASCADE"), nullable=False),
        sa.Column("patient_id", sa.Integer(), _fk("patients.id", "CASCADE"), nullable=False),
        sa.Column("doctor_id", sa.Integer(), _fk("doctors.id", "RESTRICT"), nullable=False),
        sa.Column("medication", sa.String(200), nullable=False),
        sa.Column("dosage", sa.String(100), nullable=False),
        sa.Column("duration_days", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.current_timestamp(), nullable=False),
        **MYSQL_OPTS,
    )
    op.create_table(
        "medical_records",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("patient_id", sa.Integer(), _fk("patients.id", "CASCADE"), nullable=False),
        sa.Column("appointment_id", sa.Integer(), _fk("appointments.id", "SET NULL"), nullable=True),
        sa.Column("record_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.current_timestamp(), nullable=False),
        **MYSQL_OPTS,
    )
    for table, column in FK_INDEXES:
        op.create_index(f"ix_{table}_{column}", table, [column])


def downgrade() -> None:
    # hijos primero; los índices caen con las tablas
    op.drop_table("medical_records")
    op.drop_table("prescriptions")
    op.drop_table("payments")
    op.drop_table("services")
    op.drop_table("appointments")
    op.drop_table("patients")
    op.drop_table("doctor_specialties")
    op.drop_table("doctors")
    op.drop_table("specialties")
    op.drop_table("clinics")
