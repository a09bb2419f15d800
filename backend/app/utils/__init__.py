"""
通用工具模块包
提供项目通用的工具函数和辅助类
"""

from .config_utils import (
    get_project_root,
    get_workspace_path,
    get_config_path,
    ensure_directory_exists
)

from .id_utils import generate_uuid

from .datetime_utils import (
    utc_now,
    to_iso_string
)

__all__ = [
    # config_utils
    'get_project_root', 'get_workspace_path', 'get_config_path', 'ensure_directory_exists',

    # id_utils
    'generate_uuid',

    # datetime_utils
    'utc_now', 'to_iso_string',
]
