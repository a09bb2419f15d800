"""
日志系统单元测试
快速执行，无外部依赖
"""

import logging
from unittest.mock import patch

import pytest

from app.core.log_messages import LogMessages, log_messages
from app.core.log_utils import UnifiedLogger, get_logger, setup_logging


@pytest.mark.unit
@pytest.mark.logging
class TestUnifiedLogger:
    """UnifiedLogger 单元测试类"""

    def setup_method(self):
        """每个测试方法执行前的设置"""
        self.unified_logger = UnifiedLogger("test_generation")

    def test_init(self):
        """测试初始化"""
        assert self.unified_logger.name == "test_generation"
        assert isinstance(self.unified_logger.logger, logging.Logger)

    def test_info_with_template(self):
        """模板参数同时用于格式化和结构化数据"""
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            self.unified_logger.info(log_messages.GENERATION_START, category="beach", prompt_count=3)

            call_args = mock_info.call_args
            assert call_args[0][0] == "开始生成图片: 类别=beach, 提示词数量=3"
            assert call_args[1]['extra']['category'] == "beach"
            assert call_args[1]['extra']['log_module'] == "test_generation"

    def test_info_with_preformatted_dict(self):
        """已格式化的消息中包含花括号时不二次格式化"""
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            message = f"响应结构: {{'candidates': []}} {dict(parts=1)}"

            self.unified_logger.info(message)

            assert mock_info.call_args[0][0] == message

    def test_missing_template_parameter_falls_back(self):
        """模板参数缺失时使用原始模板"""
        with patch.object(self.unified_logger.logger, 'warning') as mock_warning:
            self.unified_logger.warning(log_messages.ATTEMPT_NO_IMAGE, reason="no_parts")

            assert mock_warning.call_args[0][0] == log_messages.ATTEMPT_NO_IMAGE
            assert mock_warning.call_args[1]['extra']['reason'] == "no_parts"

    def test_error_with_exception(self):
        """错误日志附带异常信息和堆栈"""
        with patch.object(self.unified_logger.logger, 'error') as mock_error:
            error = RuntimeError("upstream 503")

            self.unified_logger.error(log_messages.ATTEMPT_FAILED, exception=error, attempt=2)

            call_args = mock_error.call_args
            assert call_args[0][0] == "第 2 张图片生成失败"
            assert call_args[1]['extra']['exception_type'] == "RuntimeError"
            assert call_args[1]['extra']['exception_message'] == "upstream 503"
            assert call_args[1]['exc_info'] is error

    def test_error_without_exception(self):
        """没有异常时不附带堆栈"""
        with patch.object(self.unified_logger.logger, 'error') as mock_error:
            self.unified_logger.error(log_messages.GENERATION_FAILED)

            assert 'exc_info' not in mock_error.call_args[1]

    def test_warning_with_exception_has_no_traceback(self):
        """警告日志只记录异常类型和消息"""
        with patch.object(self.unified_logger.logger, 'warning') as mock_warning:
            self.unified_logger.warning("令牌校验失败", exception=ValueError("expired"))

            call_args = mock_warning.call_args
            assert call_args[1]['extra']['exception_type'] == "ValueError"
            assert 'exc_info' not in call_args[1]

    @patch('app.core.log_utils.settings')
    def test_debug_when_debug_enabled(self, mock_settings):
        """调试模式开启时记录调试日志"""
        mock_settings.app_debug = True

        with patch.object(self.unified_logger.logger, 'debug') as mock_debug:
            self.unified_logger.debug("在响应字段 {field_name} 中找到图片数据", field_name="inline_data")

            assert mock_debug.call_args[0][0] == "在响应字段 inline_data 中找到图片数据"

    @patch('app.core.log_utils.settings')
    def test_debug_when_debug_disabled(self, mock_settings):
        """调试模式关闭时不记录调试日志"""
        mock_settings.app_debug = False

        with patch.object(self.unified_logger.logger, 'debug') as mock_debug:
            self.unified_logger.debug("调试消息")

            mock_debug.assert_not_called()

    def test_critical(self):
        """严重错误日志"""
        with patch.object(self.unified_logger.logger, 'critical') as mock_critical:
            self.unified_logger.critical("存储不可用")

            assert mock_critical.call_args[0][0] == "存储不可用"


@pytest.mark.unit
@pytest.mark.logging
class TestGetLogger:
    """get_logger 工厂函数测试"""

    def test_returns_cached_instance(self):
        """同名返回同一实例"""
        assert get_logger("photo_module") is get_logger("photo_module")

    def test_different_names(self):
        """不同名称返回不同实例"""
        assert get_logger("module1") is not get_logger("module2")


@pytest.mark.unit
@pytest.mark.logging
class TestLogMessages:
    """LogMessages 测试"""

    def test_format_attempt_success(self):
        """单张成功消息"""
        result = LogMessages.format_message(LogMessages.ATTEMPT_SUCCESS, attempt=1, prompt_count=3)
        assert result == "第 1/3 张图片生成成功"

    def test_get_structured_data(self):
        """结构化数据原样返回"""
        assert LogMessages.get_structured_data(generated_id="abc", count=2) == {
            "generated_id": "abc",
            "count": 2,
        }


@pytest.mark.unit
@pytest.mark.logging
class TestSetupLogging:
    """setup_logging 测试"""

    def test_console_only_when_file_logging_disabled(self):
        """关闭文件日志时只有控制台处理器"""
        with patch('app.core.log_utils.settings') as mock_settings:
            mock_settings.app_debug = False
            mock_settings.log_level = "WARNING"
            mock_settings.log_format = "%(message)s"
            mock_settings.log_to_file = False

            setup_logging()

        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert not any(isinstance(handler, logging.FileHandler) for handler in root_logger.handlers)
        assert logging.getLogger("google_genai").level == logging.WARNING
