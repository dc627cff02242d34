import os
from typing import List, Optional
from dotenv import dotenv_values

DEFAULT_CORS_ORIGINS = "http://localhost,http://localhost:8080,http://localhost:3000"

class Config:
    def __init__(self, env_file: str = '.env'):
        self.root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '../..'))
        self.api_base_url = None
        self.db_url = None
        self.request_timeout = 10.0
        self.cors_origins = []
        self.settings = dict()
        self.load(env_file)

    def load(self, filename: str = '.env'):
        env_path = os.path.join(self.root_dir, filename)
        self._get_env(env_path)
        self.settings.setdefault('APP_NAME', os.getenv('APP_NAME', 'BizSheet API'))
        self.api_base_url = self._get_api_base_url()
        self.db_url = self._get_db_url()
        self.request_timeout = self._get_request_timeout()
        self.cors_origins = self._get_cors_origins()

    def _get_env(self, filename: str = '.env') -> bool:
        """Load environment variables from a .env file, if one exists."""
        if not os.path.isfile(filename):
            return False

        try:
            values = dotenv_values(filename)
        except Exception as e:
            raise Exception(f"Error parsing environment file: {e}")

        for key, value in values.items():
            if value is None:
                continue
            self.settings.update({key: value})
            # Variables already exported by the process win over the file
            os.environ.setdefault(key, value)
        return True

    def _get_api_base_url(self) -> Optional[str]:
        url = os.getenv('API_GATEWAY_URL') or os.getenv('NEXT_PUBLIC_API_GATEWAY_URL')
        if not url or not url.strip():
            return None
        return url.strip().rstrip('/')

    def _get_db_url(self) -> str:
        return os.getenv('DATABASE_URL', f"sqlite:///{self.root_dir}/bizsheet.db")

    def _get_request_timeout(self) -> float:
        value = os.getenv('REQUEST_TIMEOUT', '10')
        try:
            return float(value)
        except ValueError:
            raise Exception(f"REQUEST_TIMEOUT must be a number of seconds, got '{value}'")

    def _get_cors_origins(self) -> List[str]:
        raw = os.getenv('CORS_ORIGINS', DEFAULT_CORS_ORIGINS)
        return [origin.strip() for origin in raw.split(',') if origin.strip()]

config = Config()
