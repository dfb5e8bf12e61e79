from datetime import datetime

class StdTime:
    FORMAT = "%Y-%m-%d_%H-%M-%S"

    @classmethod
    def Timestamp(cls, t: datetime|None = None):
        if t is None: t = datetime.now()
        return t.strftime(cls.FORMAT)
