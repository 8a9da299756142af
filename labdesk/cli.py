"""
CLI интерфейс для LabDesk
"""

import click
import sys
from pathlib import Path
import json
import logging
from datetime import datetime

from labdesk.core.engine import LabDeskEngine, DEFAULT_CONFIG, VIEWS
from labdesk.core.filters import filter_tests
from labdesk.core.models import LabTestStatus, TestCategory

# Настройка логирования
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler('labdesk.log', encoding='utf-8'),
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)

WORKFLOW_STEPS = [
    LabTestStatus.PROCESSING,
    LabTestStatus.REPORTING,
    LabTestStatus.COMPLETED,
]


def _make_engine(config, verbose=False):
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    return LabDeskEngine(Path(config) if config else None)


@click.group()
@click.version_option(version='1.0.0')
def cli():
    """LabDesk - учет лабораторных тестов: счета, лист ожидания, этапы выполнения"""
    pass


@cli.command()
@click.option('--view', '-w', type=click.Choice(VIEWS), default='all')
@click.option('--search', '-s', default=None, help='Имя пациента или название теста')
@click.option('--category', type=click.Choice([c.value for c in TestCategory]), default=None)
@click.option('--from', 'start_date', default=None, help='Дата заказа от')
@click.option('--to', 'end_date', default=None, help='Дата заказа до')
@click.option('--config', '-c', type=click.Path(exists=True))
def tests(view, search, category, start_date, end_date, config):
    """
    Список тестов с фильтрами
    """
    engine = _make_engine(config)

    try:
        found = filter_tests(engine.get_view(view), search, start_date, end_date, category)
    except (ValueError, OverflowError, TypeError) as e:
        click.echo(f"❌ Некорректный фильтр: {e}")
        sys.exit(1)

    click.echo(f"🧪 Тестов найдено: {len(found)}")
    for test in found:
        click.echo(
            f"  {test.id:<8} | {test.patient_name:<18} | {test.test_name:<25} | "
            f"{test.status.value:<10} | {test.ordered_date.strftime('%d.%m.%Y')}"
        )


@cli.command()
@click.option('--config', '-c', type=click.Path(exists=True))
def analytics(config):
    """
    Аналитика по сотрудникам и каналам поступления
    """
    engine = _make_engine(config)
    data = engine.analytics()

    click.echo("👥 Сотрудники:")
    if not data['representatives']:
        click.echo("  нет данных")
    for rep in data['representatives']:
        click.echo(
            f"  {rep['representative_name']} ({rep['representative_id']}): "
            f"тестов {rep['tests_handled']}, шагов {rep['steps_completed']}, "
            f"эффективность {rep['efficiency']}"
        )

    click.echo("\n📊 Каналы поступления:")
    for channel, count in data['acquisition'].items():
        click.echo(f"  - {channel}: {count}")


@cli.command()
@click.option('--output', '-o', default='./labdesk_output')
@click.option('--format', '-f', type=click.Choice(['csv', 'json', 'excel', 'all']), default='csv')
@click.option('--view', '-w', type=click.Choice(VIEWS), default='all')
@click.option('--config', '-c', type=click.Path(exists=True))
@click.option('--verbose', '-v', is_flag=True)
def export(output, format, view, config, verbose):
    """
    Экспорт тестов в CSV, JSON или Excel
    """
    engine = _make_engine(config, verbose)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = Path(output)
    output_dir.mkdir(parents=True, exist_ok=True)

    success = False

    if format in ['csv', 'all']:
        csv_path = output_dir / f"labdesk_tests_{timestamp}.csv"
        if engine.export_to_csv(csv_path, view):
            success = True
            click.echo(f"✅ CSV: {csv_path}")

    if format in ['json', 'all']:
        json_path = output_dir / f"labdesk_tests_{timestamp}.json"
        if engine.export_to_json(json_path, view):
            success = True
            click.echo(f"✅ JSON: {json_path}")

    if format in ['excel', 'all']:
        excel_path = output_dir / f"labdesk_tests_{timestamp}.xlsx"
        if engine.export_to_excel(excel_path):
            success = True
            click.echo(f"✅ Excel: {excel_path}")

    if success:
        click.echo(f"\n✅ Экспорт завершен успешно!")
    else:
        click.echo(f"\n❌ Экспорт завершен с ошибками")
        sys.exit(1)


@cli.command()
@click.option('--patient', '-p', default='WP001', help='ID пациента из листа ожидания')
@click.option('--complete', is_flag=True, help='Провести новые тесты до завершения')
@click.option('--config', '-c', type=click.Path(exists=True))
def demo(patient, complete, config):
    """
    Демонстрация: пациент из листа ожидания -> счет -> тесты
    """
    engine = _make_engine(config)

    waitlist_patient = engine.waitlist.get(patient)
    if waitlist_patient is None:
        click.echo(f"❌ Пациент {patient} не найден в листе ожидания")
        sys.exit(1)

    customer = engine.waitlist.select_patient(waitlist_patient)
    click.echo(f"👤 Пациент: {customer.name} ({customer.id})")
    for item in engine.billing.items:
        click.echo(f"  • {item.test_name}: {item.price:.2f} x {item.quantity}")
    click.echo(f"  Итого: {engine.billing.subtotal():.2f}")

    receipt = engine.billing.print_bill()
    if receipt is None:
        click.echo(f"❌ {engine.notifier.last.description}")
        sys.exit(1)

    click.echo(f"\n🧾 Счет {receipt.bill_id}: {len(receipt.tests)} тестов")

    if complete:
        for test in receipt.tests:
            for status in WORKFLOW_STEPS:
                engine.tests.update_workflow(test.id, status)
        click.echo(f"✅ Все тесты счета завершены")

    click.echo(f"\n📊 Сводка:")
    click.echo(f"  Ожидающих тестов: {len(engine.tests.pending_tests)}")
    click.echo(f"  Завершенных тестов: {len(engine.tests.completed_tests)}")


@cli.command()
@click.argument('config_file', type=click.Path())
@click.option('--overwrite', '-o', is_flag=True,
              help='Перезаписать существующий файл')
def create_config(config_file, overwrite):
    """
    Создает файл конфигурации с настройками по умолчанию
    """
    config_path = Path(config_file)

    if config_path.exists() and not overwrite:
        click.echo(f"❌ Файл {config_file} уже существует. Используйте --overwrite для перезаписи.")
        sys.exit(1)

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(DEFAULT_CONFIG, f, ensure_ascii=False, indent=2)

        click.echo(f"✅ Файл конфигурации создан: {config_path}")
        click.echo("\nВы можете отредактировать этот файл для настройки LabDesk.")

    except Exception as e:
        click.echo(f"❌ Ошибка при создании конфигурации: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
