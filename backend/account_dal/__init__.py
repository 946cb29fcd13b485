"""Redisドキュメントストア上のアカウント管理"""
from account_dal.services.account_dal import AccountDAL

__all__ = ["AccountDAL"]
