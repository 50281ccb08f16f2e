"""Tests for resource tools whose requests need more than the default encoding."""

import json

import httpx
import pytest
from conftest import FakeCms

from xibo_server.models.dataset import AddDataSetRowRequest
from xibo_server.models.playlist import AssignLibraryItemsRequest, OrderWidgetsRequest
from xibo_server.models.user import PreferenceItem, SetUserPreferencesRequest
from xibo_server.models.widget import AddWidgetRequest, EditWidgetRequest
from xibo_server.tools.dataset import add_dataset_row
from xibo_server.tools.playlist import assign_library_items, order_widgets
from xibo_server.tools.registry import TOOL_GROUPS, TOOL_REGISTRY, get_tool_defn, list_tools
from xibo_server.tools.user import set_user_preferences
from xibo_server.tools.widget import add_widget, edit_widget


def sent_fields(request: httpx.Request) -> httpx.QueryParams:
    return httpx.QueryParams(request.content.decode())


class TestPlaylistTools:
    @pytest.mark.asyncio
    async def test_order_widgets_sends_positions_by_widget_id(self, fake_cms: FakeCms) -> None:
        fake_cms.add("POST", "/api/playlist/order/5", json={"playlistId": 5, "name": "Main"})

        result = await order_widgets(OrderWidgetsRequest(playlistId=5, widgets=[12, 11, 30]))

        assert result.success, f"Expected success: {result}"
        fields = sent_fields(fake_cms.requests[0])
        assert fields["widgets[12]"] == "1"
        assert fields["widgets[11]"] == "2"
        assert fields["widgets[30]"] == "3"

    @pytest.mark.asyncio
    async def test_assign_library_items_sends_array_field(self, fake_cms: FakeCms) -> None:
        fake_cms.add("POST", "/api/playlist/library/assign/5", json={"playlistId": 5, "name": "M"})

        await assign_library_items(AssignLibraryItemsRequest(playlistId=5, media=[7, 8]))

        fields = sent_fields(fake_cms.requests[0])
        assert fields.get_list("media[]") == ["7", "8"], f"Unexpected body: {fields}"


class TestWidgetTools:
    @pytest.mark.asyncio
    async def test_add_widget_fills_type_and_playlist_in_path(self, fake_cms: FakeCms) -> None:
        fake_cms.add(
            "POST",
            "/api/playlist/widget/clock/9",
            201,
            json={"widgetId": 44, "playlistId": 9, "type": "clock"},
        )

        result = await add_widget(AddWidgetRequest(type="clock", playlistId=9, displayOrder=1))

        assert result.success, f"Expected success: {result}"
        assert result.data["widgetId"] == 44
        fields = sent_fields(fake_cms.requests[0])
        assert "type" not in fields and "playlistId" not in fields, (
            f"Path parameters leaked into the body: {fields}"
        )
        assert fields["displayOrder"] == "1"

    @pytest.mark.asyncio
    async def test_edit_widget_inlines_module_properties(self, fake_cms: FakeCms) -> None:
        fake_cms.add("PUT", "/api/playlist/widget/44", json={"widgetId": 44})

        await edit_widget(
            EditWidgetRequest(widgetId=44, duration=15, properties={"text": "Hello"})
        )

        fields = sent_fields(fake_cms.requests[0])
        assert fields["text"] == "Hello"
        assert fields["duration"] == "15"
        assert "properties" not in fields


class TestDataSetTools:
    @pytest.mark.asyncio
    async def test_add_row_uses_column_field_names(self, fake_cms: FakeCms) -> None:
        fake_cms.add("POST", "/api/dataset/data/3", 201, json={"id": 100})

        result = await add_dataset_row(
            AddDataSetRowRequest(dataSetId=3, values={"12": "Tokyo", "13": 21})
        )

        assert result.success, f"Expected success: {result}"
        fields = sent_fields(fake_cms.requests[0])
        assert fields["dataSetColumnId_12"] == "Tokyo"
        assert fields["dataSetColumnId_13"] == "21"
        assert "values" not in fields


class TestUserTools:
    @pytest.mark.asyncio
    async def test_set_preferences_sends_json(self, fake_cms: FakeCms) -> None:
        fake_cms.add("POST", "/api/user/pref", 204)

        result = await set_user_preferences(
            SetUserPreferencesRequest(
                preference=[PreferenceItem(option="navigationMenuPosition", value="horizontal")]
            )
        )

        assert result.success, f"Expected success: {result}"
        body = json.loads(fake_cms.requests[0].content)
        assert body == {
            "preference": [{"option": "navigationMenuPosition", "value": "horizontal"}]
        }


class TestRegistry:
    def test_every_tool_is_registered_once(self) -> None:
        total = sum(len(impls) for impls in TOOL_GROUPS.values())
        assert len(TOOL_REGISTRY) == total, "Tool names must be unique across groups"

    def test_every_tool_has_a_description(self) -> None:
        undocumented = [name for name, defn in TOOL_REGISTRY.items() if not defn.description]
        assert undocumented == [], f"Tools without docstring: {undocumented}"

    def test_lookup(self) -> None:
        defn = get_tool_defn("upload_google_font")
        assert defn.group == "font"
        assert defn.request_model.__name__ == "UploadGoogleFontRequest"

    def test_unknown_tool_and_group(self) -> None:
        with pytest.raises(ValueError, match="Unknown tool"):
            get_tool_defn("launch_rockets")
        with pytest.raises(ValueError, match="Unknown tool group"):
            list_tools("rockets")

    def test_list_tools_by_group(self) -> None:
        names = {defn.name for defn in list_tools("sync_group")}
        assert names == {
            "get_sync_groups",
            "add_sync_group",
            "edit_sync_group",
            "delete_sync_group",
            "assign_sync_group_members",
            "get_sync_group_displays",
        }
