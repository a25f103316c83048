# alliance_wars/db/base.py
# Import all the models, so that Base has them before create_all is called
from alliance_wars.db.base_class import Base
from alliance_wars.schemas.kv_entry import KVEntry
from alliance_wars.schemas.system import SystemAlert
