"""add service to appointments

Revision ID: b71f04c3e9d2
Revises: 5e2a9c1d7b40
Create Date: 2025-09-24 19:03:11.204877

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'b71f04c3e9d2'
down_revision: Union[str, Sequence[str], None] = '5e2a9c1d7b40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # servicio reservado en el turno; un servicio usado no se puede borrar
    with op.batch_alter_table("appointments") as batch:
        batch.add_column(sa.Column(
            "service_id",
            sa.Integer(),
            nullable=False,
            comment="Service booked for this appointment (e.g., consultation, vaccination)",
        ))
        batch.create_foreign_key(
            "fk_appointment_service",
            "services",
            ["service_id"],
            ["id"],
            ondelete="RESTRICT",
            onupdate="CASCADE",
        )
        batch.create_index("ix_appointments_service_id", ["service_id"])

    # listado de turnos por clínica ordenado por fecha
    op.create_index("ix_appt_clinic_date", "appointments", ["clinic_id", "appointment_date"])
    # chequeo de doble reserva del doctor
    op.create_index("ix_appt_doctor_date", "appointments", ["doctor_id", "appointment_date"])


def downgrade() -> None:
    op.drop_index("ix_appt_doctor_date", table_name="appointments")
    op.drop_index("ix_appt_clinic_date", table_name="appointments")
    with op.batch_alter_table("appointments") as batch:
        batch.drop_constraint("fk_appointment_service", type_="foreignkey")
        batch.drop_index("ix_appointments_service_id")
        batch.drop_column("service_id")
