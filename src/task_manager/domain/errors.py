class TaskNotFoundError(LookupError):
    def __init__(self, task_id: int):
        super().__init__(f"Task not found with id: {task_id}")
        self.task_id = task_id
