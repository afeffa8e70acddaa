"""数据模块"""
