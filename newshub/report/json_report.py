# newshub/report/json_report.py

"""
Генерация JSON-отчёта для ленты NewsHub.

Сериализация FeedPage в файл.
"""
import json
from pathlib import Path

from newshub.app import FeedPage


def render_json(page: FeedPage, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет ленту page в формате JSON по указанному пути.

    :param page: объект FeedPage с заголовком и статьями
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from newshub.report.json_report import render_json
    report_path = render_json(page, 'reports/headlines.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(page.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
