# medicall/data/default_doctors.py
"""
Canonical starter dataset.

Pushed to an empty server by the first client that loads it, and by
``scripts/seed_doctors.py``. Ids are fixed so seeding twice overwrites
instead of duplicating.
"""
from typing import List

from medicall.schemas.doctor import Doctor, ScheduleSlot, Visit

# (id, executive, name, specialty, hospital, area, phone, classification, insurance)
DOCTORS = [
    ("doc-001", "Ana Torres", "Dr. Ricardo Salinas", "Traumatología", "Hospital Ángeles Pedregal", "Sur", "55-5123-4501", "A", True),
    ("doc-002", "Ana Torres", "Dra. Lucía Mendoza", "Ortopedia", "Hospital Ángeles Pedregal", "Sur", "55-5123-4502", "A", False),
    ("doc-003", "Ana Torres", "Dr. Jorge Castañeda", "Neurocirugía", "Médica Sur", "Sur", "55-5123-4503", "B", True),
    ("doc-004", "Carlos Ruiz", "Dra. Patricia Ibarra", "Cirugía de Columna", "Hospital ABC Observatorio", "Poniente", "55-5123-4504", "A", False),
    ("doc-005", "Carlos Ruiz", "Dr. Fernando Ochoa", "Traumatología", "Hospital ABC Santa Fe", "Poniente", "55-5123-4505", "B", False),
    ("doc-006", "Carlos Ruiz", "Dr. Miguel Arriaga", "Ortopedia Pediátrica", "Hospital Español", "Centro", "55-5123-4506", "C", True),
    ("doc-007", "Sofía Herrera", "Dra. Gabriela Núñez", "Medicina del Deporte", "Star Médica Lomas Verdes", "Norte", "55-5123-4507", "B", False),
    ("doc-008", "Sofía Herrera", "Dr. Alberto Villaseñor", "Neurocirugía", "Hospital Satélite", "Norte", "55-5123-4508", "A", True),
]

WEEKDAYS = ["Lunes", "Martes", "Miércoles", "Jueves", "Viernes"]


def default_doctors() -> List[Doctor]:
    """Build the starter doctors with an office schedule and one planned visit each."""
    doctors = []
    for index, (doc_id, executive, name, specialty, hospital, area, phone, classification, insurance) in enumerate(DOCTORS):
        schedule = [
            ScheduleSlot(day=day, time="16:00 - 20:00", active=(i % 2 == index % 2))
            for i, day in enumerate(WEEKDAYS)
        ]
        visits = [
            Visit(
                id=f"{doc_id}-v1",
                date="2025-01-15",
                time="10:00",
                note="Presentación de línea de implantes",
                objective="Presentación de producto",
                status="planned",
            )
        ]
        doctors.append(
            Doctor(
                id=doc_id,
                executive=executive,
                name=name,
                specialty=specialty,
                hospital=hospital,
                area=area,
                phone=phone,
                classification=classification,
                is_insurance_doctor=insurance,
                visits=visits,
                schedule=schedule,
            )
        )
    return doctors
