"""
Tests for portfolio grouping and the presentation feed.
"""

from datetime import datetime, timezone

import pytest

from app.models.client import ClientStatus
from app.schemas.calculation import ConsultingInputs, WasteCategory
from app.schemas.client import ClientInfo, ClientSummary, GroupBy
from app.schemas.opportunity import Priority
from app.services.cost_model import compute_costs
from app.services.portfolio_service import build_portfolio_summary, cost_range_label, group_clients, status_counts
from app.services.report_service import (
    build_chart_feed,
    build_report,
    cost_rollup,
    cost_split,
    cost_timeline,
    risk_factors,
    waste_breakdown_rows,
    wizard_progress,
)


def _summary(name: str, status: ClientStatus, total_cost: int, created: datetime) -> ClientSummary:
    return ClientSummary(
        id=name.lower(),
        client_name=name,
        company=f"{name} Inc",
        email="",
        status=status,
        total_cost=total_cost,
        created_at=created,
        updated_at=created,
    )


@pytest.fixture
def clients() -> list[ClientSummary]:
    return [
        _summary("Ada", ClientStatus.COMPLETED, 1256104, datetime(2026, 3, 4, tzinfo=timezone.utc)),
        _summary("Grace", ClientStatus.DRAFT, 0, datetime(2026, 3, 20, tzinfo=timezone.utc)),
        _summary("Linus", ClientStatus.COMPLETED, 75000, datetime(2026, 4, 1, tzinfo=timezone.utc)),
        _summary("Barbara", ClientStatus.ARCHIVED, 49999, datetime(2026, 4, 2, tzinfo=timezone.utc)),
    ]


class TestPortfolio:
    """Grouping and counting client summaries."""

    @pytest.mark.parametrize(
        ("cost", "label"),
        [
            (0, "No Cost Calculated"),
            (1, "Under $50K"),
            (49999, "Under $50K"),
            (50000, "$50K - $100K"),
            (100000, "$100K - $250K"),
            (249999, "$100K - $250K"),
            (250000, "Over $250K"),
        ],
    )
    def test_cost_range_label(self, cost, label):
        assert cost_range_label(cost) == label

    def test_no_grouping(self, clients):
        groups = group_clients(clients, None)

        assert [group.label for group in groups] == ["All Clients"]
        assert groups[0].items == clients

    def test_group_by_status_keeps_first_seen_order(self, clients):
        groups = group_clients(clients, GroupBy.STATUS)

        assert [group.label for group in groups] == ["Completed", "Draft", "Archived"]
        assert [item.client_name for item in groups[0].items] == ["Ada", "Linus"]

    def test_group_by_month(self, clients):
        groups = group_clients(clients, GroupBy.MONTH)
        assert [(group.label, len(group.items)) for group in groups] == [("March 2026", 2), ("April 2026", 2)]

    def test_group_by_cost_range(self, clients):
        groups = group_clients(clients, GroupBy.COST_RANGE)

        assert [group.label for group in groups] == [
            "Over $250K",
            "No Cost Calculated",
            "$50K - $100K",
            "Under $50K",
        ]

    def test_status_counts_include_every_status(self, clients):
        assert status_counts(clients) == {
            ClientStatus.DRAFT: 1,
            ClientStatus.COMPLETED: 2,
            ClientStatus.PENDING: 0,
            ClientStatus.ARCHIVED: 1,
        }

    def test_summary(self, clients):
        summary = build_portfolio_summary(clients, GroupBy.STATUS)

        assert summary.total_clients == 4
        assert summary.total_pipeline_cost == 1256104 + 75000 + 49999
        assert len(summary.groups) == 3

    def test_empty_portfolio(self):
        summary = build_portfolio_summary([])

        assert summary.total_clients == 0
        assert summary.total_pipeline_cost == 0
        assert summary.groups[0].items == []


class TestChartFeed:
    """Dashboard data derived from the default project."""

    def test_cost_split(self, default_inputs):
        efficient, waste = cost_split(compute_costs(default_inputs))

        assert (efficient.name, efficient.value, efficient.percentage) == ("Efficient Project Cost", 718080, 57.2)
        assert (waste.name, waste.value, waste.percentage) == ("Current Waste", 538024, 42.8)

    def test_breakdown_rows(self, default_inputs):
        rows = waste_breakdown_rows(compute_costs(default_inputs))

        assert [row.category for row in rows] == list(WasteCategory)
        assert rows[0].label == "Process Inefficiencies"
        assert rows[7].label == "Opportunity"
        assert rows[2].percentage == 26.7
        assert sum(row.value for row in rows) == 538024

    def test_breakdown_rows_without_waste(self, make_inputs):
        result = compute_costs(
            make_inputs(
                inefficiency_percentage=0,
                meetings_per_week=0,
                communication_overhead=0,
                resource_utilization=90,
                idle_time_percentage=5,
                defect_rate=0,
                delay_percentage=0,
                resource_cost_per_hour=85,
            )
        )

        assert all(row.percentage == 0 for row in waste_breakdown_rows(result))

    def test_timeline(self, default_inputs):
        points = cost_timeline(compute_costs(default_inputs), default_inputs.project_duration)

        assert [point.label for point in points] == [f"Month {month}" for month in range(1, 7)]
        assert points[0].cumulative == 234473
        assert points[-1].cumulative == 1256104
        assert all(point.monthly == 209351 for point in points)
        assert [point.cumulative for point in points] == sorted(point.cumulative for point in points)

    def test_timeline_uses_whole_months(self, make_inputs):
        inputs = make_inputs(project_duration=2.5)
        assert len(cost_timeline(compute_costs(inputs), inputs.project_duration)) == 2

    def test_rollup_covers_all_waste(self, default_inputs):
        rollup = cost_rollup(compute_costs(default_inputs))

        assert {item.group: item.value for item in rollup} == {
            "Project Management": 123612,
            "Communication": 143616,
            "Resource Management": 143194,
            "Quality": 51702,
            "Timeline": 75900,
        }

    def test_risk_levels(self, default_inputs):
        timeline, quality, resource = risk_factors(compute_costs(default_inputs), default_inputs)

        assert (timeline.level, timeline.impact, timeline.cost) == (Priority.MEDIUM, "25% delay probability", 75900)
        assert (quality.level, quality.impact) == (Priority.LOW, "6% defect rate")
        assert (resource.level, resource.cost) == (Priority.MEDIUM, 122074)

    def test_high_risk(self, make_inputs):
        inputs = make_inputs(delay_percentage=30, defect_rate=20, resource_utilization=60)
        levels = [risk.level for risk in risk_factors(compute_costs(inputs), inputs)]

        assert levels == [Priority.HIGH, Priority.HIGH, Priority.HIGH]

    def test_risk_costs_tolerate_missing_categories(self, default_inputs):
        partial = compute_costs(default_inputs).model_copy(
            update={"waste_breakdown": {WasteCategory.QUALITY_REWORK: 51702}}
        )

        timeline, quality, resource = risk_factors(partial, default_inputs)

        assert (timeline.cost, quality.cost, resource.cost) == (0, 51702, 0)

    def test_feed_bundles_everything(self, default_inputs):
        feed = build_chart_feed(compute_costs(default_inputs), default_inputs)

        assert len(feed.cost_split) == 2
        assert len(feed.breakdown) == 9
        assert len(feed.timeline) == 6
        assert len(feed.benchmarks) == 6
        assert feed.benchmarks[0].your_performance == 62.5


class TestReport:
    """Exporter document and wizard progress."""

    def test_report(self, default_inputs):
        calculations = compute_costs(default_inputs)
        report = build_report(ClientInfo(name="Ada", company="Engines Ltd"), calculations, default_inputs)

        assert report.executive_summary == (
            "Your organization is currently losing $2,152,096 annually across 4 similar projects. "
            "This represents 43% of your project budgets being wasted due to process inefficiencies."
        )
        assert [metric.amount for metric in report.key_metrics] == [1256104, 538024, 718080, 2152096, 1506467]
        assert report.scenarios[0].annual_savings == 645629
        assert len(report.opportunities) == 5
        assert len(report.recommendations) == 5

    def test_report_uses_given_consulting_terms(self, default_inputs):
        calculations = compute_costs(default_inputs)
        no_cost = ConsultingInputs(consulting_fee=0, support_cost=0)
        report = build_report(ClientInfo(), calculations, default_inputs, no_cost)

        assert all(scenario.payback_months == 0 for scenario in report.scenarios)

    def test_wizard_progress(self, default_inputs):
        steps = wizard_progress(ClientInfo(name="Ada"), None)

        assert [(step.step, step.completed) for step in steps] == [
            ("Client Information", False),
            ("Cost Parameters", True),
            ("Cost Analysis", False),
        ]

        steps = wizard_progress(ClientInfo(name="Ada", company="Engines Ltd"), compute_costs(default_inputs))
        assert all(step.completed for step in steps)
