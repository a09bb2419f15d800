"""
生成结果记录模型
对应数据库表：generated_images
"""

import enum

from sqlalchemy import Column, DateTime, Integer, JSON, String, Text
from sqlalchemy.dialects.postgresql import JSONB

from app.db.database import Base

# PostgreSQL使用JSONB，其它方言（单元测试中的SQLite）回退到通用JSON
JsonColumn = JSON().with_variant(JSONB(), "postgresql")


class GenerationStatus(str, enum.Enum):
    """生成结果状态"""
    COMPLETED = "completed"
    PARTIAL = "partial"

    @classmethod
    def from_count(cls, generated_count: int) -> "GenerationStatus":
        """至少生成一张图片即为completed"""
        return cls.COMPLETED if generated_count > 0 else cls.PARTIAL


class GeneratedImage(Base):
    """
    一次生成请求的汇总记录

    生成循环结束后写入一次，之后不再修改。
    """
    __tablename__ = "generated_images"

    # 主键（同时用于生成图片的存储路径）
    id = Column(String(64), primary_key=True)

    # 用户信息
    user_id = Column(Text, nullable=False, index=True)

    # 请求内容
    original_image_path = Column(Text, nullable=False)
    category = Column(Text, nullable=True)  # 按请求原样保存，单提示词请求时为NULL
    custom_prompt = Column(Text, nullable=True)
    prompts = Column(JsonColumn, nullable=False)

    # 生成结果
    generated_image_urls = Column(JsonColumn, nullable=False)
    status = Column(String(20), nullable=False)
    generated_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False)
