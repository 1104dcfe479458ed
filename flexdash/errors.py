class EngineError(Exception):
    pass


class ConfigError(EngineError):
    pass


class DatasetNotFoundError(EngineError, KeyError):
    def __init__(self, dataset_id: str):
        super().__init__(dataset_id)
        self.dataset_id = dataset_id

    def __str__(self) -> str:
        return f"Dataset not found: {self.dataset_id}"


class FilterSetNotFoundError(EngineError, KeyError):
    def __init__(self, filter_set_id: str):
        super().__init__(filter_set_id)
        self.filter_set_id = filter_set_id

    def __str__(self) -> str:
        return f"Saved filter set not found: {self.filter_set_id}"
