"""
Service context for log lines.

Identifies which process produced a line when several API replicas
share one log stream.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'seat-booking')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    # Container hostname in k8s/docker, PID locally
    instance = os.getenv('HOSTNAME') or str(os.getpid())
    return f'{service_name}@{deploy_env}:{instance[:12]}'
