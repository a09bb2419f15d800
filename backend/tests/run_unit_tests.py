#!/usr/bin/env python3
"""
单元测试运行脚本
专门用于运行单元测试，设置独立的环境配置
"""

import os
import sys
import subprocess


def main():
    """主函数"""
    # 设置单元测试环境变量
    env = os.environ.copy()
    env["TESTING"] = "true"
    env["APP_DEBUG"] = "true"
    env["LOG_LEVEL"] = "ERROR"
    env["LOG_TO_FILE"] = "false"

    # 使用内存数据库
    env["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
    env["DB_AUTO_CREATE"] = "false"

    # Mock存储和模型配置
    env["STORAGE_ADAPTER"] = "gcs"
    env["GCS_BUCKET"] = "test-bucket"
    env["GEMINI_API_KEY"] = "test-gemini-key"

    backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [backend_dir, env.get("PYTHONPATH")]))

    # 构建pytest命令 - 只运行单元测试
    cmd = [
        sys.executable, "-m", "pytest",
        "tests/unit/",           # 只运行unit目录下的测试
        "-m", "unit",            # 只运行标记为unit的测试
        "-v",
        "--tb=short"
    ]

    # 添加额外的参数
    if len(sys.argv) > 1:
        cmd.extend(sys.argv[1:])

    # 运行测试
    result = subprocess.run(cmd, env=env, cwd=backend_dir)

    # 返回测试结果
    sys.exit(result.returncode)


if __name__ == "__main__":
    main()
