"""随包发布的属性文件"""
