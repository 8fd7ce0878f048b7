"""
测试模块

包含项目的单元测试和集成测试。

测试结构:
- test_*.py: 转换器、模型缓存、配置等单元测试
- integration/: HTTP端点集成测试
- fixtures.py: 测试数据构造工具
"""

from .fixtures import *  # noqa: F401,F403
