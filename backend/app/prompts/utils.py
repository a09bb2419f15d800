"""
Prompt工具模块
提供提示词模板的加载与渲染
"""

from pathlib import Path
from typing import Any, Dict

import yaml
from jinja2 import Template

# 类别提示词 = 通用写实规则 + 场景描述
SCENE_PROMPT_TEMPLATE = Template("{{ photo_rules }}\n\nScene: {{ scene }}")


def load_yaml_template(template_file: Path) -> Dict[str, Any]:
    """读取YAML模板文件"""
    with open(template_file, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def render_scene_prompt(photo_rules: str, scene: str) -> str:
    """渲染单条场景提示词"""
    return SCENE_PROMPT_TEMPLATE.render(photo_rules=photo_rules.strip(), scene=scene.strip())
