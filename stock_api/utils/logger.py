import datetime
import json
import os
import threading
from collections import deque
from typing import Any, Dict, List, Optional


class Logger:
    """Console logger that also keeps recent entries in memory and, locally, in a JSON-lines file."""

    def __init__(self, max_logs: int = 1000):
        self.logs = deque(maxlen=max_logs)
        self.lock = threading.Lock()

        self.is_local = os.getenv('ENV') == 'LOCAL'
        self.log_file = None
        if self.is_local:
            self._setup_file_logging(os.getenv('LOG_DIR', 'logs'))

    def _setup_file_logging(self, log_dir: str):
        try:
            os.makedirs(log_dir, exist_ok=True)
            self.log_file = os.path.join(log_dir, 'stock_api.log')
            with open(self.log_file, 'a'):
                pass
            print(f'File logging enabled at {self.log_file}')
        except OSError as e:
            print(f'File logging setup failed: {e}')
            self.log_file = None

    def _store_in_file(self, log_entry: Dict[str, Any]):
        if not self.log_file:
            return
        try:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(json.dumps(log_entry, default=str) + '\n')
        except OSError as e:
            print(f'Failed to store log in file: {e}')

    def __log(self, level: str, message: str, data: Optional[Dict] = None):
        timestamp = datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        log_entry = {
            'timestamp': timestamp,
            'level': level,
            'message': message,
            'data': data
        }

        print(f'[{timestamp}] [{level}] {message}')

        with self.lock:
            self.logs.append(log_entry)

        if self.is_local:
            self._store_in_file(log_entry)

    def debug(self, message: str, data: Optional[Dict] = None):
        self.__log('DEBUG', message, data)

    def info(self, message: str, data: Optional[Dict] = None):
        self.__log('INFO', message, data)

    def warning(self, message: str, data: Optional[Dict] = None):
        self.__log('WARNING', message, data)

    def error(self, message: str, data: Optional[Dict] = None):
        self.__log('ERROR', message, data)

    def log_request_json(self, log_data: Dict[str, Any]):
        """Log an API call record (method, path, status, duration)."""
        self.info(f'API_CALL: {json.dumps(log_data)}', log_data)

    def log_error_json(self, error_data: Dict[str, Any]):
        """Log an unhandled API error record."""
        self.error(f'API_ERROR: {json.dumps(error_data)}', error_data)

    def get_logs(self, level: Optional[str] = None, limit: Optional[int] = None) -> List[Dict]:
        """Stored entries, newest first, optionally filtered by level."""
        with self.lock:
            logs = list(self.logs)

        logs.reverse()

        if level:
            logs = [log for log in logs if log.get('level') == level]

        if limit:
            logs = logs[:limit]

        return logs

    def clear_logs(self):
        with self.lock:
            self.logs.clear()


# Global logger instance
logger = Logger()
