"""Energy and battery request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import VehicleProfile


class VehicleProfileModel(BaseModel):
    name: str = "Mid-size EV"
    mass_kg: float = Field(1800.0, gt=0)
    gravity: float = Field(9.81, gt=0)
    air_density: float = Field(1.225, ge=0)
    rolling_resistance: float = Field(0.01, ge=0)
    drag_coefficient: float = Field(0.28, ge=0)
    frontal_area_m2: float = Field(2.3, ge=0)
    motor_efficiency: float = Field(0.90, gt=0, le=1)
    regenerative_efficiency: float = Field(0.70, ge=0, le=1)
    average_speed_kmh: float = Field(40.0, gt=0)
    battery_capacity_kwh: float = Field(60.0, gt=0)

    def to_domain(self) -> VehicleProfile:
        return VehicleProfile(**self.model_dump())


class EnergyConsumptionRequest(BaseModel):
    distance_m: float = Field(..., ge=0, description="Trip distance in metres.")
    elevation_gain_m: float = Field(0.0, ge=0)
    elevation_loss_m: float = Field(0.0, ge=0)
    vehicle: Optional[VehicleProfileModel] = None


class EnergyBreakdownModel(BaseModel):
    total_energy: float
    rolling_resistance: float
    air_resistance: float
    uphill_energy: float
    regenerated_energy: float
    distance_km: float
    estimated_time: float


class ChargingTimeRequest(BaseModel):
    current_battery: float = Field(..., ge=0, le=100)
    target_battery: float = Field(80.0, ge=0, le=100)
    charger_power_kw: Optional[float] = Field(None, gt=0, description="Defaults to the campus charger power.")
    battery_capacity_kwh: float = Field(60.0, gt=0)


class ChargingPlanModel(BaseModel):
    hours: int
    minutes: int
    total_minutes: int
    energy_needed: float


class RemainingBatteryRequest(BaseModel):
    current_battery: float = Field(..., ge=0, le=100)
    energy_consumed_kwh: float = Field(..., ge=0)
    battery_capacity_kwh: float = Field(60.0, gt=0)


class RemainingBatteryResponse(BaseModel):
    current_battery: float
    remaining_battery: float


class ChargingIntervalsRequest(BaseModel):
    trip_energies_kwh: List[float] = Field(..., description="Energy needed by each trip of the day, in order.")
    initial_battery: float = Field(80.0, ge=0, le=100)
    battery_capacity_kwh: float = Field(60.0, gt=0)
    charger_power_kw: Optional[float] = Field(None, gt=0)


class ChargingIntervalModel(BaseModel):
    before_trip: int
    current_battery: float
    charge_to: float
    charging_time: ChargingPlanModel
    reason: str


class ChargingScheduleResponse(BaseModel):
    intervals: List[ChargingIntervalModel]
    final_battery: float


class TripRequest(BaseModel):
    start_id: str = Field(..., description="Campus location id where the trip starts.")
    end_id: str = Field(..., description="Campus location id where the trip ends.")
    battery_level: float = Field(..., ge=0, le=100)
    vehicle: Optional[VehicleProfileModel] = None


class EfficiencyRatingModel(BaseModel):
    rating: str
    color: str
    efficiency: int


class ProfilePointModel(BaseModel):
    distance_km: float
    elevation: float
    lat: float
    lng: float


class ChargingAdviceModel(BaseModel):
    needed: bool
    current_battery: Optional[float] = None
    target_battery: Optional[float] = None
    time: Optional[ChargingPlanModel] = None
    reason: Optional[str] = None


class TripResponse(BaseModel):
    start_id: str
    end_id: str
    distance: float
    elevation_gain: float
    elevation_loss: float
    energy: EnergyBreakdownModel
    efficiency: EfficiencyRatingModel
    battery_current: float
    battery_after_trip: float
    charging: ChargingAdviceModel
    route_type: Literal["road", "straight"]
    elevation_profile: List[ProfilePointModel]
    elevation_estimated: bool
    route_error: Optional[str] = None
