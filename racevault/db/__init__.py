from racevault.db.database import get_admin_session, get_session, init_db
from racevault.db.operations import (
    asset_exists,
    boost_name_in_use,
    count_assets,
    create_user_asset,
    delete_boost_name,
    delete_user_asset,
    existing_asset_ids,
    fetch_existing_assets,
    find_user_asset,
    get_boost_name,
    get_boost_names,
    get_user_asset,
    get_user_assets,
    insert_asset,
    list_asset_ids,
    list_assets,
    replace_user_assets,
    row_to_record,
    set_boost_name,
    update_asset,
    update_user_asset,
)

__all__ = [
    "asset_exists",
    "boost_name_in_use",
    "count_assets",
    "create_user_asset",
    "delete_boost_name",
    "delete_user_asset",
    "existing_asset_ids",
    "fetch_existing_assets",
    "find_user_asset",
    "get_admin_session",
    "get_boost_name",
    "get_boost_names",
    "get_session",
    "get_user_asset",
    "get_user_assets",
    "init_db",
    "insert_asset",
    "list_asset_ids",
    "list_assets",
    "replace_user_assets",
    "row_to_record",
    "set_boost_name",
    "update_asset",
    "update_user_asset",
]
