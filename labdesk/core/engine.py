"""
Основной движок LabDesk
"""

import copy
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from . import initial_data
from .analytics import acquisition_analytics, representative_analytics
from .billing import BillingCart
from .lab_tests import LabTestStore
from .models import LabTest
from .notifier import Notifier
from .waitlist import WaitlistStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'seed': {
        'load_initial_data': True
    },
    'billing': {
        'bill_id_prefix': 'BILL-',
        'test_id_prefix': 'LT'
    },
    'results': {
        'result_url_base': 'https://example.com/results',
        'report_url_base': 'https://example.com/reports'
    },
    'output': {
        'encoding': 'utf-8-sig',
        'separator': ',',
        'date_format': '%d.%m.%Y'
    }
}

VIEWS = ('pending', 'completed', 'all')


def merge_dicts(d1: Dict[str, Any], d2: Dict[str, Any]):
    """Рекурсивное слияние словарей (d2 поверх d1)"""
    for key, value in d2.items():
        if key in d1 and isinstance(d1[key], dict) and isinstance(value, dict):
            merge_dicts(d1[key], value)
        else:
            d1[key] = value


def tests_to_dataframe(tests: List[LabTest], date_format: Optional[str] = None) -> pd.DataFrame:
    """Преобразует тесты в плоскую таблицу (без журнала переходов)"""
    if not tests:
        return pd.DataFrame()

    rows = []
    for test in tests:
        row = test.to_dict()
        history = row.pop('workflow_history', [])
        row['history_steps'] = len(history)
        if date_format:
            row['ordered_date'] = test.ordered_date.strftime(date_format)
            if test.completed_date:
                row['completed_date'] = test.completed_date.strftime(date_format)
        rows.append(row)

    return pd.DataFrame(rows)


class LabDeskEngine:
    """Собирает хранилища лаборатории и управляет их состоянием"""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Инициализирует движок

        Args:
            config_path: Путь к файлу конфигурации (опционально)
            clock: Источник текущего времени
        """
        self.config = self._load_config(config_path)
        self.clock = clock

        billing_config = self.config['billing']
        results_config = self.config['results']

        self.notifier = Notifier()
        self.tests = LabTestStore(
            notifier=self.notifier,
            result_url_base=results_config['result_url_base'],
            report_url_base=results_config['report_url_base'],
            clock=clock,
        )
        self.billing = BillingCart(
            self.tests,
            notifier=self.notifier,
            bill_id_prefix=billing_config['bill_id_prefix'],
            test_id_prefix=billing_config['test_id_prefix'],
            clock=clock,
        )
        self.waitlist = WaitlistStore(self.billing)
        self.test_options = []
        self.representatives = []

        if self.config['seed'].get('load_initial_data', True):
            self.reset()

        logger.info("LabDeskEngine инициализирован")

    def reset(self):
        """Возвращает все хранилища к начальным данным"""
        self.tests.seed(
            initial_data.initial_pending_tests(self.clock()),
            initial_data.initial_completed_tests(),
        )
        self.billing.seed(initial_data.initial_customers())
        self.waitlist.seed(initial_data.initial_waitlist_patients())
        self.test_options = initial_data.lab_test_options()
        self.representatives = initial_data.lab_representatives()
        self.notifier.clear()

        logger.debug("Состояние лаборатории сброшено к начальным данным")

    def find_option(self, option_id: str):
        for option in self.test_options:
            if option.id == option_id:
                return option
        return None

    def get_view(self, view: str = 'all') -> List[LabTest]:
        if view == 'pending':
            return self.tests.pending_tests
        if view == 'completed':
            return self.tests.completed_tests
        if view == 'all':
            return self.tests.all_tests
        raise ValueError(f"Неизвестный список тестов: {view}")

    def analytics(self) -> Dict[str, Any]:
        tests = self.tests.all_tests
        return {
            'representatives': [rep.to_dict() for rep in representative_analytics(tests)],
            'acquisition': acquisition_analytics(tests).to_dict(),
        }

    def export_to_csv(self, output_path: Path, view: str = 'all') -> bool:
        """
        Экспортирует тесты в CSV файл

        Returns:
            True если успешно, False в противном случае
        """
        try:
            output_config = self.config['output']
            df = tests_to_dataframe(self.get_view(view), output_config.get('date_format'))

            if df.empty:
                logger.warning("Нет тестов для экспорта")
                return False

            output_path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(
                output_path,
                index=False,
                encoding=output_config.get('encoding', 'utf-8-sig'),
                sep=output_config.get('separator', ','),
            )

            logger.info(f"Данные экспортированы в: {output_path}")
            logger.info(f"  Всего записей: {len(df)}")
            return True

        except Exception as e:
            logger.error(f"Ошибка при экспорте в CSV: {e}")
            return False

    def export_to_json(self, output_path: Path, view: str = 'all') -> bool:
        """Экспортирует тесты вместе с журналом переходов в JSON"""
        try:
            tests = self.get_view(view)
            if not tests:
                logger.warning("Нет тестов для экспорта")
                return False

            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump([test.to_dict() for test in tests], f, ensure_ascii=False, indent=2)

            logger.info(f"Данные экспортированы в: {output_path}")
            logger.info(f"  Тестов: {len(tests)}")
            return True

        except Exception as e:
            logger.error(f"Ошибка при экспорте в JSON: {e}")
            return False

    def export_to_excel(self, output_path: Path) -> bool:
        """Экспортирует ожидающие и завершенные тесты на отдельные листы"""
        try:
            date_format = self.config['output'].get('date_format')
            output_path.parent.mkdir(parents=True, exist_ok=True)

            with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
                summary = pd.DataFrame([{
                    'Ожидающих тестов': len(self.tests.pending_tests),
                    'Завершенных тестов': len(self.tests.completed_tests),
                    'Пациентов в листе ожидания': len(self.waitlist.patients),
                }])
                summary.to_excel(writer, sheet_name='Сводка', index=False)

                for sheet_name, view in (('Ожидающие', 'pending'), ('Завершенные', 'completed')):
                    df = tests_to_dataframe(self.get_view(view), date_format)
                    if not df.empty:
                        df.to_excel(writer, sheet_name=sheet_name, index=False)

            logger.info(f"Данные экспортированы в: {output_path}")
            return True

        except Exception as e:
            logger.error(f"Ошибка при экспорте в Excel: {e}")
            return False

    def _load_config(self, config_path: Optional[Path]) -> Dict[str, Any]:
        """Загружает конфигурацию из файла"""
        merged_config = copy.deepcopy(DEFAULT_CONFIG)

        if config_path and Path(config_path).exists():
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    user_config = json.load(f)

                merge_dicts(merged_config, user_config)
                return merged_config

            except Exception as e:
                logger.warning(f"Не удалось загрузить конфиг {config_path}: {e}. Использую настройки по умолчанию")
                return copy.deepcopy(DEFAULT_CONFIG)

        return merged_config
