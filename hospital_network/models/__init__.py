from hospital_network.models.clinic import Clinic
from hospital_network.models.specialty import Specialty
from hospital_network.models.doctor import Doctor
from hospital_network.models.links import DoctorSpecialty
from hospital_network.models.patient import Patient
from hospital_network.models.service import Service
from hospital_network.models.appointment import Appointment, AppointmentStatus
from hospital_network.models.payment import Payment, PaymentMethod
from hospital_network.models.prescription import Prescription
from hospital_network.models.medical_record import MedicalRecord

__all__ = [
    "Clinic", "Specialty", "Doctor", "DoctorSpecialty", "Patient", "Service",
    "Appointment", "AppointmentStatus", "Payment", "PaymentMethod",
    "Prescription", "MedicalRecord",
]
