# bingtiles/exceptions.py


class BingTilesError(Exception):
    """
    本包所有异常的基类
    """


class MetadataFetchError(BingTilesError):
    """
    元数据请求失败（网络错误、超时、非 JSON 响应）
    """


class MetadataValidationError(BingTilesError):
    """
    元数据响应不符合要求（状态码、认证结果、资源数量或字段格式）
    """
