"""Tests for database CRUD operations."""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

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
    set_boost_name,
    update_asset,
    update_user_asset,
)
from racevault.models.assets import BoostRecord, CarPartRecord, DriverRecord
from racevault.models.collection import AssetHolding


class TestAssetOperations:
    async def test_insert_and_fetch_round_trip(self, session: AsyncSession) -> None:
        """Stored drivers come back as equal records."""
        driver = DriverRecord(
            id="d1",
            name="DRIVER",
            rarity=6,
            series=9,
            collection_sub_name="X_SUBTITLE_2",
            min_gp_tier=2,
            stats_per_level=[{"overtaking": 1}, {"overtaking": 2}],
            season=6,
        )
        await insert_asset(session, driver)
        await session.commit()

        existing = await fetch_existing_assets(session, DriverRecord, ["d1", "missing"])

        assert existing == {"d1": driver}

    async def test_fetch_empty_ids(self, session: AsyncSession) -> None:
        assert await fetch_existing_assets(session, DriverRecord, []) == {}

    async def test_fetch_is_scoped_to_type(self, session: AsyncSession) -> None:
        await insert_asset(session, BoostRecord(id="x1", name="Boost X"))
        await session.commit()

        assert await fetch_existing_assets(session, DriverRecord, ["x1"]) == {}
        assert set(await fetch_existing_assets(session, BoostRecord, ["x1"])) == {"x1"}

    async def test_insert_duplicate_raises(self, session: AsyncSession) -> None:
        await insert_asset(session, CarPartRecord(id="c1", name="PART"))
        await session.commit()
        session.expunge_all()

        with pytest.raises(IntegrityError):
            await insert_asset(session, CarPartRecord(id="c1", name="PART"))

    async def test_update_overwrites_fields(self, session: AsyncSession) -> None:
        await insert_asset(session, BoostRecord(id="b1", name="Boost A", boost_stats={"a": 1}))
        await session.commit()

        updated = BoostRecord(id="b1", name="Boost B", boost_stats={"a": 2})
        await update_asset(session, updated)
        await session.commit()
        session.expire_all()

        existing = await fetch_existing_assets(session, BoostRecord, ["b1"])
        assert existing["b1"] == updated

    async def test_asset_exists(self, session: AsyncSession) -> None:
        await insert_asset(session, DriverRecord(id="d1", name="D"))
        await session.commit()

        assert await asset_exists(session, "driver", "d1")
        assert not await asset_exists(session, "car_part", "d1")

    async def test_list_assets_ignores_inapplicable_filters(self, session: AsyncSession) -> None:
        await insert_asset(session, BoostRecord(id="b1", name="Boost A"))
        await session.commit()

        records, total = await list_assets(session, "boost", rarity=5, series=3)

        assert total == 1
        assert [r.id for r in records] == ["b1"]

    async def test_search_treats_wildcards_literally(self, session: AsyncSession) -> None:
        await insert_asset(session, DriverRecord(id="d1", name="Max_Power"))
        await insert_asset(session, DriverRecord(id="d2", name="MaxXPower"))
        await session.commit()

        records, _ = await list_assets(session, "driver", search="x_p")
        _, percent_total = await list_assets(session, "driver", search="%")

        assert [r.id for r in records] == ["d1"]
        assert percent_total == 0

    async def test_existing_asset_ids(self, session: AsyncSession) -> None:
        await insert_asset(session, DriverRecord(id="d1", name="D"))
        await session.commit()

        assert await existing_asset_ids(session, "driver", ["d1", "d9"]) == {"d1"}
        assert await existing_asset_ids(session, "driver", []) == set()

    async def test_list_asset_ids_by_name(self, session: AsyncSession) -> None:
        await insert_asset(session, BoostRecord(id="b1", name="Boost Z"))
        await insert_asset(session, BoostRecord(id="b2", name="Boost A"))
        await session.commit()

        assert await list_asset_ids(session, "boost") == ["b2", "b1"]

    async def test_count_assets(self, session: AsyncSession) -> None:
        await insert_asset(session, DriverRecord(id="d1", name="D"))
        await insert_asset(session, DriverRecord(id="d2", name="E"))
        await insert_asset(session, BoostRecord(id="b1", name="B"))
        await session.commit()

        assert await count_assets(session) == {"driver": 2, "car_part": 0, "boost": 1}


class TestUserAssetOperations:
    async def test_create_and_get(self, session: AsyncSession) -> None:
        item = await create_user_asset(session, "user-1", "driver", "d1", level=2)
        await session.commit()

        fetched = await get_user_asset(session, "user-1", item.id)

        assert fetched is not None
        assert fetched.level == 2

    async def test_get_scoped_to_user(self, session: AsyncSession) -> None:
        item = await create_user_asset(session, "user-1", "driver", "d1")
        await session.commit()

        assert await get_user_asset(session, "user-2", item.id) is None

    async def test_find_user_asset(self, session: AsyncSession) -> None:
        await create_user_asset(session, "user-1", "boost", "b1")
        await session.commit()

        assert await find_user_asset(session, "user-1", "boost", "b1") is not None
        assert await find_user_asset(session, "user-1", "driver", "b1") is None

    async def test_duplicate_ownership_raises(self, session: AsyncSession) -> None:
        await create_user_asset(session, "user-1", "driver", "d1")
        await session.commit()

        with pytest.raises(IntegrityError):
            await create_user_asset(session, "user-1", "driver", "d1")

    async def test_list_by_type(self, session: AsyncSession) -> None:
        await create_user_asset(session, "user-1", "driver", "d1")
        await create_user_asset(session, "user-1", "car_part", "c1")
        await session.commit()

        assert len(await get_user_assets(session, "user-1")) == 2
        [part] = await get_user_assets(session, "user-1", "car_part")
        assert part.asset_id == "c1"

    async def test_update_keeps_omitted_fields(self, session: AsyncSession) -> None:
        item = await create_user_asset(session, "user-1", "driver", "d1", level=1, card_count=7)
        await session.commit()

        updated = await update_user_asset(session, item, level=4)

        assert updated.level == 4
        assert updated.card_count == 7

    async def test_delete_scoped_to_user(self, session: AsyncSession) -> None:
        item = await create_user_asset(session, "user-1", "driver", "d1")
        await session.commit()

        assert await delete_user_asset(session, "user-2", item.id) is False
        assert await delete_user_asset(session, "user-1", item.id) is True

    async def test_replace_only_touches_one_type(self, session: AsyncSession) -> None:
        await create_user_asset(session, "user-1", "driver", "d1", level=1)
        await create_user_asset(session, "user-1", "boost", "b1", card_count=2)
        await create_user_asset(session, "user-2", "driver", "d1", level=5)
        await session.commit()

        written = await replace_user_assets(
            session, "user-1", "driver", [AssetHolding("d2", level=3)]
        )
        await session.commit()

        assert written == 1
        assert [i.asset_id for i in await get_user_assets(session, "user-1", "driver")] == ["d2"]
        assert len(await get_user_assets(session, "user-1", "boost")) == 1
        assert len(await get_user_assets(session, "user-2")) == 1

    async def test_replace_can_keep_same_asset(self, session: AsyncSession) -> None:
        await create_user_asset(session, "user-1", "driver", "d1", level=1)
        await session.commit()

        await replace_user_assets(session, "user-1", "driver", [AssetHolding("d1", level=7)])
        await session.commit()

        [item] = await get_user_assets(session, "user-1")
        assert item.level == 7


class TestBoostNameOperations:
    async def test_set_and_get(self, session: AsyncSession) -> None:
        await set_boost_name(session, "user-1", "b1", "Rocket")
        await session.commit()

        row = await get_boost_name(session, "user-1", "b1")

        assert row is not None
        assert row.custom_name == "Rocket"
        assert await get_boost_name(session, "user-2", "b1") is None

    async def test_set_replaces(self, session: AsyncSession) -> None:
        await set_boost_name(session, "user-1", "b1", "Rocket")
        await set_boost_name(session, "user-1", "b1", "Comet")
        await session.commit()

        assert await get_boost_names(session, "user-1") == {"b1": "Comet"}

    async def test_name_in_use(self, session: AsyncSession) -> None:
        await set_boost_name(session, "user-1", "b1", "Rocket")
        await session.commit()

        assert await boost_name_in_use(session, "user-1", "Rocket", "b2")
        assert not await boost_name_in_use(session, "user-1", "Rocket", "b1")
        assert not await boost_name_in_use(session, "user-2", "Rocket", "b2")

    async def test_duplicate_name_raises(self, session: AsyncSession) -> None:
        await set_boost_name(session, "user-1", "b1", "Rocket")
        await session.commit()

        with pytest.raises(IntegrityError):
            await set_boost_name(session, "user-1", "b2", "Rocket")

    async def test_delete(self, session: AsyncSession) -> None:
        await set_boost_name(session, "user-1", "b1", "Rocket")
        await session.commit()

        assert await delete_boost_name(session, "user-2", "b1") is False
        assert await delete_boost_name(session, "user-1", "b1") is True
        assert await get_boost_names(session, "user-1") == {}
