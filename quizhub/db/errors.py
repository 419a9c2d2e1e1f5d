class StorageUnavailableError(Exception):
    code = "E_STORAGE_UNAVAILABLE"
    message = "Storage is temporarily unavailable, please retry"
