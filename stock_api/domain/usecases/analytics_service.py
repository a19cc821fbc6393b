"""
Métricas agregadas das chamadas à API, calculadas a partir dos registros
API_CALL e API_ERROR mantidos em memória pelo logger global.
"""

import statistics
from collections import Counter
from typing import Any, Dict, List

from stock_api.utils.logger import Logger, logger


class AnalyticsService:
    """Processa logs em memória e calcula métricas de uso da API."""

    def __init__(self, source: Logger = logger):
        self.source = source

    def _records(self, key: str, level: str = None) -> List[Dict[str, Any]]:
        return [
            log['data'] for log in self.source.get_logs(level=level)
            if log.get('data') and key in log['data']
        ]

    def get_metrics(self) -> Dict[str, Any]:
        requests_ = self._records('duration_ms')
        errors = self._records('error_type', level='ERROR')

        total = len(requests_)
        durations = [r['duration_ms'] for r in requests_]
        client_errors = sum(1 for r in requests_ if r.get('status_code', 200) >= 400)

        return {
            'total_requests': total,
            'total_errors': len(errors) + client_errors,
            'average_response_time': round(statistics.mean(durations), 2) if durations else 0,
            'error_rate': round((len(errors) + client_errors) / total * 100, 2) if total else 0,
            'requests_by_endpoint': dict(Counter(r.get('path', 'unknown') for r in requests_).most_common()),
            'requests_by_status': {
                str(k): v for k, v in Counter(r.get('status_code', 0) for r in requests_).most_common()
            },
            'error_breakdown': dict(Counter(e.get('error_type', 'unknown') for e in errors).most_common()),
            'recent_activity': requests_[:20],
        }
