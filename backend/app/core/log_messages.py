"""
日志消息模板模块
统一管理所有业务日志消息模板，便于维护和国际化
"""

from typing import Dict, Any


class LogMessages:
    """日志消息模板类"""

    # ==================== 通用日志消息 ====================
    OPERATION_SUCCESS = "操作成功完成: {operation_name}"

    # ==================== 图片生成相关 ====================
    GENERATION_START = "开始生成图片: 类别={category}, 提示词数量={prompt_count}"
    GENERATION_SUCCESS = "图片生成完成: {generated_count}/{prompt_count}"
    GENERATION_FAILED = "图片生成失败"
    GENERATION_TIMEOUT = "图片生成超时"
    ATTEMPT_SUCCESS = "第 {attempt}/{prompt_count} 张图片生成成功"
    ATTEMPT_FAILED = "第 {attempt} 张图片生成失败"
    ATTEMPT_NO_IMAGE = "第 {attempt} 张图片响应中未找到图片数据"
    SOURCE_IMAGE_NOT_FOUND = "原始图片不存在"

    # ==================== 数据库操作相关 ====================
    DB_QUERY_FAILED = "数据库查询失败"
    DB_UPDATE_SUCCESS = "数据库更新成功"
    DB_UPDATE_FAILED = "数据库更新失败"

    # ==================== 业务验证相关 ====================
    VALIDATION_FAILED = "验证失败: {reason}"

    @classmethod
    def format_message(cls, message_template: str, **kwargs: Any) -> str:
        """格式化日志消息模板"""
        return message_template.format(**kwargs)

    @classmethod
    def get_structured_data(cls, **kwargs: Any) -> Dict[str, Any]:
        """获取结构化日志数据"""
        return kwargs


# 全局实例
log_messages = LogMessages()
