"""
SQLAlchemy database models for the net worth planner.

This module defines the tables for scenarios and the assets, income streams,
milestones and forecast settings that belong to them.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import (
    Column, Integer, String, DateTime, Date, Float, ForeignKey, Text,
    Index, CheckConstraint
)
from sqlalchemy.orm import relationship

from planner.models.scenario import (
    Asset as AssetModel,
    ForecastSettings,
    IncomeStream as IncomeStreamModel,
    Milestone as MilestoneModel,
)

from .base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _isoformat(value: Any) -> Any:
    return value.isoformat() if value is not None else None


class Scenario(Base):
    """Scenario model holding a user's forecast inputs."""

    __tablename__ = 'scenarios'

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(255), index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    location = Column(String(255))
    age = Column(Integer)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    assets = relationship(
        "Asset", back_populates="scenario", cascade="all, delete-orphan",
        order_by="Asset.position"
    )
    income_streams = relationship(
        "IncomeStream", back_populates="scenario", cascade="all, delete-orphan",
        order_by="IncomeStream.position"
    )
    milestones = relationship(
        "Milestone", back_populates="scenario", cascade="all, delete-orphan",
        order_by="Milestone.position"
    )
    settings = relationship(
        "ScenarioSettings", back_populates="scenario", uselist=False,
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index('idx_scenarios_user_created', 'user_id', 'created_at'),
        CheckConstraint("age IS NULL OR (age >= 16 AND age <= 100)", name='ck_scenario_age'),
    )

    def to_dict(self, include_relations: bool = False) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "description": self.description,
            "personalProfile": {"age": self.age, "location": self.location or ""},
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }
        if include_relations:
            data["assets"] = [asset.to_dict() for asset in self.assets]
            data["incomeStreams"] = [stream.to_dict() for stream in self.income_streams]
            data["milestones"] = [milestone.to_dict() for milestone in self.milestones]
            data["settings"] = self.settings.to_dict() if self.settings else None
        return data

    def __repr__(self):
        return f"<Scenario(id={self.id}, user_id={self.user_id}, name='{self.name}')>"


class Asset(Base):
    """Asset held within a scenario."""

    __tablename__ = 'assets'

    id = Column(String(36), primary_key=True, default=_new_id)
    scenario_id = Column(String(36), ForeignKey('scenarios.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(String(50), nullable=False)
    growth_rate = Column(Float)  # NULL means the category default applies
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    scenario = relationship("Scenario", back_populates="assets")

    __table_args__ = (
        CheckConstraint("category IN ('TAXABLE', 'TAX_DEFERRED', 'TAX_FREE', 'REAL_ESTATE', 'CRYPTO')", name='ck_asset_category'),
        Index('idx_assets_scenario_position', 'scenario_id', 'position'),
    )

    def apply(self, asset: AssetModel) -> None:
        """Copy validated field values onto this row."""
        self.name = asset.name
        self.amount = asset.amount
        self.category = asset.category.value
        self.growth_rate = asset.growth_rate

    def to_model(self) -> AssetModel:
        return AssetModel(
            id=self.id, name=self.name, amount=self.amount,
            category=self.category, growth_rate=self.growth_rate
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "scenarioId": self.scenario_id,
            "name": self.name,
            "amount": self.amount,
            "category": self.category,
            "growthRate": self.growth_rate,
        }

    def __repr__(self):
        return f"<Asset(id={self.id}, name='{self.name}', category='{self.category}', amount={self.amount})>"


class IncomeStream(Base):
    """Recurring income stream within a scenario."""

    __tablename__ = 'income_streams'

    id = Column(String(36), primary_key=True, default=_new_id)
    scenario_id = Column(String(36), ForeignKey('scenarios.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)  # Per period
    frequency = Column(String(50), nullable=False, default='MONTHLY')
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    raise_rate = Column(Float)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    scenario = relationship("Scenario", back_populates="income_streams")

    __table_args__ = (
        CheckConstraint("frequency IN ('MONTHLY', 'QUARTERLY', 'ANNUALLY')", name='ck_income_frequency'),
        CheckConstraint("end_date IS NULL OR end_date >= start_date", name='ck_income_dates'),
        Index('idx_income_streams_scenario_position', 'scenario_id', 'position'),
    )

    def apply(self, stream: IncomeStreamModel) -> None:
        """Copy validated field values onto this row."""
        self.name = stream.name
        self.amount = stream.amount
        self.frequency = stream.frequency
        self.start_date = stream.start_date
        self.end_date = stream.end_date
        self.raise_rate = stream.raise_rate

    def to_model(self) -> IncomeStreamModel:
        return IncomeStreamModel(
            id=self.id, name=self.name, amount=self.amount,
            frequency=self.frequency, start_date=self.start_date,
            end_date=self.end_date, raise_rate=self.raise_rate
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "scenarioId": self.scenario_id,
            "name": self.name,
            "amount": self.amount,
            "frequency": self.frequency,
            "startDate": _isoformat(self.start_date),
            "endDate": _isoformat(self.end_date),
            "raiseRate": self.raise_rate,
        }

    def __repr__(self):
        return f"<IncomeStream(id={self.id}, name='{self.name}', amount={self.amount}, frequency='{self.frequency}')>"


class Milestone(Base):
    """One-time financial event within a scenario."""

    __tablename__ = 'milestones'

    id = Column(String(36), primary_key=True, default=_new_id)
    scenario_id = Column(String(36), ForeignKey('scenarios.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False, default='CUSTOM')
    date = Column(Date, nullable=False)
    impact = Column(Float, nullable=False)  # Signed cash delta
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    scenario = relationship("Scenario", back_populates="milestones")

    __table_args__ = (
        CheckConstraint("type IN ('RETIREMENT', 'COLLEGE', 'MAJOR_PURCHASE', 'INCOME_CHANGE', 'DEATH_OF_SPOUSE', 'CUSTOM')", name='ck_milestone_type'),
        Index('idx_milestones_scenario_date', 'scenario_id', 'date'),
    )

    def apply(self, milestone: MilestoneModel) -> None:
        """Copy validated field values onto this row."""
        self.name = milestone.name
        self.type = milestone.type.value
        self.date = milestone.date
        self.impact = milestone.impact

    def to_model(self) -> MilestoneModel:
        return MilestoneModel(
            id=self.id, name=self.name, type=self.type,
            date=self.date, impact=self.impact
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "scenarioId": self.scenario_id,
            "name": self.name,
            "type": self.type,
            "date": _isoformat(self.date),
            "impact": self.impact,
        }

    def __repr__(self):
        return f"<Milestone(id={self.id}, name='{self.name}', date={self.date}, impact={self.impact})>"


class ScenarioSettings(Base):
    """Forecast assumptions stored for a scenario."""

    __tablename__ = 'forecast_settings'

    id = Column(String(36), primary_key=True, default=_new_id)
    scenario_id = Column(String(36), ForeignKey('scenarios.id', ondelete='CASCADE'), nullable=False, unique=True)
    inflation_rate = Column(Float, nullable=False, default=2.5)
    stock_growth_rate = Column(Float, nullable=False, default=7.0)
    real_estate_growth = Column(Float, nullable=False, default=3.0)

    scenario = relationship("Scenario", back_populates="settings")

    def apply(self, settings: ForecastSettings) -> None:
        """Copy validated field values onto this row."""
        self.inflation_rate = settings.inflation_rate
        self.stock_growth_rate = settings.stock_growth_rate
        self.real_estate_growth = settings.real_estate_growth

    def to_model(self) -> ForecastSettings:
        return ForecastSettings(
            inflation_rate=self.inflation_rate,
            stock_growth_rate=self.stock_growth_rate,
            real_estate_growth=self.real_estate_growth,
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.to_model().model_dump(by_alias=True)

    def __repr__(self):
        return f"<ScenarioSettings(scenario_id={self.scenario_id}, inflation_rate={self.inflation_rate})>"
