"""
Service context extraction for logging.

Tags every log line with the service name, deploy environment and process id
so lines from several workers can be told apart.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'gift_wave')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    return f'{service_name}@{deploy_env}:{os.getpid()}'
