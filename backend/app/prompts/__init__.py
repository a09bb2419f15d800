"""
类别提示词目录
负责加载类别提示词模板，并把类别解析为有序的提示词序列
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from app.core.config import settings
from app.core.log_utils import get_logger
from app.prompts.utils import load_yaml_template, render_scene_prompt

logger = get_logger(__name__)

CATEGORY_PROMPTS_FILE = Path(__file__).parent / "generation" / "category_prompts.yml"

# 每个类别允许的提示词数量
MIN_PROMPTS_PER_CATEGORY = 1
MAX_PROMPTS_PER_CATEGORY = 3


class CategoryPromptCatalog:
    """
    类别提示词目录

    部署时加载一次，之后只读。未知类别回退到默认类别，解析永不失败。
    """

    def __init__(self, template_file: Path = CATEGORY_PROMPTS_FILE, default_category: Optional[str] = None):
        template_data = load_yaml_template(template_file)
        photo_rules = template_data.get("photo_rules", "")
        categories = template_data.get("categories") or {}

        self._prompts: Dict[str, Tuple[str, ...]] = {}
        for category, scenes in categories.items():
            if not MIN_PROMPTS_PER_CATEGORY <= len(scenes or []) <= MAX_PROMPTS_PER_CATEGORY:
                raise ValueError(
                    f"类别 {category} 的提示词数量必须在"
                    f"{MIN_PROMPTS_PER_CATEGORY}-{MAX_PROMPTS_PER_CATEGORY}之间"
                )
            self._prompts[category] = tuple(
                render_scene_prompt(photo_rules, scene) for scene in scenes
            )

        self.default_category = default_category or template_data.get("default_category")
        if self.default_category not in self._prompts:
            raise ValueError(f"默认类别 {self.default_category} 不在提示词目录中")

        logger.info(
            "类别提示词加载完成",
            operation="category_prompts_loaded",
            categories=list(self._prompts.keys()),
            default_category=self.default_category
        )

    def resolve(self, category: str) -> Tuple[str, ...]:
        """
        把类别解析为提示词序列

        Args:
            category: 类别名称

        Returns:
            Tuple[str, ...]: 有序提示词，未知类别返回默认类别的提示词
        """
        prompts = self._prompts.get(category)
        if prompts is None:
            logger.info(
                "未知类别，使用默认类别",
                category=category,
                default_category=self.default_category
            )
            return self._prompts[self.default_category]
        return prompts

    def is_known(self, category: str) -> bool:
        """类别是否存在于目录中"""
        return category in self._prompts

    def list_categories(self) -> List[str]:
        """列出所有类别"""
        return list(self._prompts.keys())


_catalog: Optional[CategoryPromptCatalog] = None


def get_prompt_catalog() -> CategoryPromptCatalog:
    """获取全局提示词目录实例（首次调用时加载）"""
    global _catalog
    if _catalog is None:
        _catalog = CategoryPromptCatalog(default_category=settings.generation_default_category)
    return _catalog


def resolve_prompts(category: str) -> Tuple[str, ...]:
    """把类别解析为有序提示词序列"""
    return get_prompt_catalog().resolve(category)
