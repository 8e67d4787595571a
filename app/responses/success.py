from .base import build_response


def data_response(data=None):
    return build_response(200, True, data=data)


def created_response(data=None):
    return build_response(201, True, data=data)


def paginated_response(data, meta: dict):
    return build_response(200, True, data=data, meta=meta)


def message_response(message: str):
    return build_response(200, True, data={"message": message})
