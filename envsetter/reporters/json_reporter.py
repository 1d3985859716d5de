"""
JSON 报告器 - 输出 JSON 格式报告
"""

import json
import sys
from typing import TextIO

from envsetter.reporters.base import ScanReport


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def report(self, reports: list[ScanReport]) -> None:
        """生成 JSON 格式报告（不输出任何值，只输出是否已设置）"""
        report_data = {
            "folders": [
                {
                    "folder": report.folder,
                    "target": report.target,
                    "mode": "deep" if report.deep else "env-files",
                    "stats": report.stats.to_dict(),
                    "variables": [
                        {
                            "name": name,
                            "set": report.is_set(name),
                            "files": sorted(files),
                        }
                        for name, files in sorted(report.found.items())
                    ],
                }
                for report in reports
            ],
            "summary": {
                "total": sum(r.stats.total for r in reports),
                "already_set": sum(r.stats.already_set for r in reports),
                "missing": sum(r.stats.missing for r in reports),
            },
        }

        json_str = json.dumps(report_data, indent=2, ensure_ascii=False)
        print(json_str, file=self.output)
