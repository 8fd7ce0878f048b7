"""集成测试公共夹具"""

import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# 应用模块在导入时读取配置，固定使用仓库中的模板配置
os.environ["CONFIG_PATH"] = str(
    Path(__file__).resolve().parents[2] / "config" / "example.json"
)


@pytest.fixture
def client():
    """运行完整生命周期的测试客户端"""
    from gemini_proxy.main import app

    with TestClient(app) as test_client:
        yield test_client
