from enum import Enum, IntEnum


class DBOperation(IntEnum):
    # stored as SMALLINT in the audit log
    INSERT = 0
    UPDATE = 1
    DELETE = 2


class MovementDirection(str, Enum):
    IN = "in"
    OUT = "out"


class AuditTable(str, Enum):
    STOCK = "STOCK"
    STOCK_MOVEMENT = "MOV_ESTOQUE"
    PRODUCT = "PRODUCT"
