from pydantic import BaseModel, ConfigDict, Field


class WifiAccessPoint(BaseModel):
    """A visible access point as expected by the WiFi geolocation API."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mac_address: str = Field(alias="macAddress", examples=["AA:BB:CC:DD:EE:FF"])
    signal_strength: int = Field(alias="signalStrength", le=0, description="RSSI in dBm.")


class GeoRequest(BaseModel):
    """Request body for the WiFi geolocation API.

    `considerIp` lets the service fall back to the requester's IP address as a
    secondary signal.
    """

    model_config = ConfigDict(populate_by_name=True)

    consider_ip: bool = Field(default=True, alias="considerIp")
    wifi_access_points: list[WifiAccessPoint] = Field(alias="wifiAccessPoints", min_length=1)
