"""
propresolver - 分层配置解析核心模块

模块结构：
- config/     配置解析器、属性文件解析、资源/系统属性提供者、自身设置
- models/     解析视图与配置层数据模型
- resources/  随包发布的默认属性文件
"""

__version__ = "0.1.0"
