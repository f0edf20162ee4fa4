"""Default HTML analytics report template."""

ANALYTICS_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }}</title>
    <style>
        :root {
            --primary: #2563eb; --success: #16a34a; --warning: #ca8a04; --danger: #dc2626;
            --gray-100: #f3f4f6; --gray-200: #e5e7eb; --gray-700: #374151; --gray-900: #111827;
        }
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            line-height: 1.6; color: var(--gray-900); max-width: 1200px; margin: 0 auto; padding: 2rem; background: var(--gray-100); }
        .card { background: white; padding: 1.5rem 2rem; border-radius: 8px; margin-bottom: 1.5rem; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
        h1 { color: var(--primary); margin: 0 0 0.5rem 0; }
        h2 { margin: 0 0 1rem 0; font-size: 1.2rem; }
        .meta { color: var(--gray-700); font-size: 0.9rem; }
        .stats { display: flex; gap: 2rem; margin-top: 1rem; flex-wrap: wrap; }
        .stat { background: var(--gray-100); padding: 0.5rem 1rem; border-radius: 4px; }
        .stat-value { font-size: 1.5rem; font-weight: bold; color: var(--primary); }
        .stat-label { font-size: 0.75rem; color: var(--gray-700); }
        table { width: 100%; border-collapse: collapse; font-size: 0.9rem; }
        th { background: var(--gray-200); padding: 0.5rem; text-align: left; }
        td { padding: 0.5rem; border-bottom: 1px solid var(--gray-200); }
        td.num, th.num { text-align: right; }
        .badge { display: inline-block; padding: 0.15rem 0.6rem; border-radius: 9999px; font-size: 0.75rem; font-weight: 600; }
        .badge-URGENT { background: #fee2e2; color: #991b1b; }
        .badge-STANDARD { background: #fef3c7; color: #92400e; }
        .badge-ROUTINE { background: #dcfce7; color: #166534; }
        .bar { height: 8px; background: var(--gray-200); border-radius: 4px; overflow: hidden; width: 160px; display: inline-block; vertical-align: middle; }
        .bar-fill { height: 100%; background: var(--primary); }
        .estimate { border-left: 4px solid var(--warning); }
        .estimate-label { display: inline-block; background: #fef3c7; color: #92400e; padding: 0.1rem 0.5rem; border-radius: 4px; font-size: 0.75rem; font-weight: 600; margin-left: 0.5rem; }
        .note { color: var(--gray-700); font-size: 0.8rem; font-style: italic; margin-top: 0.75rem; }
    </style>
</head>
<body>
    <div class="card">
        <h1>{{ title }}</h1>
        <p class="meta">
            {{ report.period.start_date.strftime('%Y-%m-%d') }} to {{ report.period.end_date.strftime('%Y-%m-%d') }}
            ({{ report.period.days }} days) &middot; Generated: {{ generated_at }}
        </p>
        <div class="stats">
            <div class="stat"><div class="stat-value">{{ report.distribution.total }}</div><div class="stat-label">Claims</div></div>
            <div class="stat"><div class="stat-value">{{ report.approval_metrics.overall.approval_rate }}%</div><div class="stat-label">Approval Rate</div></div>
            <div class="stat"><div class="stat-value">{{ report.confidence_metrics.overall.average }}%</div><div class="stat-label">Avg Confidence</div></div>
            <div class="stat"><div class="stat-value">{{ report.financial_metrics.overall.total_billed | money }}</div><div class="stat-label">Total Billed</div></div>
        </div>
    </div>

    <div class="card">
        <h2>Priority Distribution</h2>
        <table>
            <thead><tr><th>Priority</th><th class="num">Claims</th><th>Share</th></tr></thead>
            <tbody>
            {% for tier, share in report.distribution.by_priority.items() %}
                <tr>
                    <td><span class="badge badge-{{ tier }}">{{ tier }}</span></td>
                    <td class="num">{{ share.count }}</td>
                    <td><div class="bar"><div class="bar-fill" style="width: {{ share.percentage }}%"></div></div> {{ share.percentage }}%</td>
                </tr>
            {% endfor %}
            </tbody>
        </table>
    </div>

    <div class="card">
        <h2>Processing Efficiency</h2>
        <table>
            <thead><tr><th>Priority</th><th class="num">Decided</th><th class="num">Avg Hours</th><th class="num">Avg Days</th>
                <th class="num">Min / Max Hours</th><th class="num">SLA Target</th><th class="num">SLA Compliance</th><th class="num">Approval Rate</th></tr></thead>
            <tbody>
            {% for tier, timing in report.time_metrics.items() %}
                <tr>
                    <td><span class="badge badge-{{ tier }}">{{ tier }}</span></td>
                    <td class="num">{{ timing.count }}</td>
                    <td class="num">{{ timing.average_hours }}</td>
                    <td class="num">{{ timing.average_days }}</td>
                    <td class="num">{{ timing.min_hours }} / {{ timing.max_hours }}</td>
                    <td class="num">{{ timing.sla_target_hours }}h</td>
                    <td class="num">{{ timing.sla_compliance_percent }}%</td>
                    <td class="num">{{ report.approval_metrics.by_priority[tier].approval_rate }}%</td>
                </tr>
            {% endfor %}
            </tbody>
        </table>
    </div>

    <div class="card">
        <h2>Classification Confidence</h2>
        {% set dist = report.confidence_metrics.overall.distribution %}
        <table>
            <thead><tr><th>Bucket</th><th class="num">Claims</th><th class="num">Share</th></tr></thead>
            <tbody>
                <tr><td>High (&ge; 90%)</td><td class="num">{{ dist.high }}</td><td class="num">{{ dist.high_percent }}%</td></tr>
                <tr><td>Medium (70-89%)</td><td class="num">{{ dist.medium }}</td><td class="num">{{ dist.medium_percent }}%</td></tr>
                <tr><td>Low (&lt; 70%)</td><td class="num">{{ dist.low }}</td><td class="num">{{ dist.low_percent }}%</td></tr>
            </tbody>
        </table>
    </div>

    <div class="card">
        <h2>Financials</h2>
        <table>
            <thead><tr><th>Priority</th><th class="num">Claims</th><th class="num">Total Billed</th><th class="num">Total Approved</th>
                <th class="num">Avg Billed</th><th class="num">Share of Value</th></tr></thead>
            <tbody>
            {% for tier, fin in report.financial_metrics.by_priority.items() %}
                <tr>
                    <td><span class="badge badge-{{ tier }}">{{ tier }}</span></td>
                    <td class="num">{{ fin.count }}</td>
                    <td class="num">{{ fin.total_billed | money }}</td>
                    <td class="num">{{ fin.total_approved | money }}</td>
                    <td class="num">{{ fin.average_billed | money }}</td>
                    <td class="num">{{ fin.percent_of_total_value }}%</td>
                </tr>
            {% endfor %}
            </tbody>
        </table>
    </div>

    {% set cmp = report.comparison_metrics %}
    <div class="card estimate">
        <h2>Prioritized vs. FIFO Baseline<span class="estimate-label">Estimated</span></h2>
        <table>
            <thead><tr><th>Priority</th><th class="num">Avg Hours</th><th class="num">FIFO Avg Hours (est.)</th>
                <th class="num">SLA</th><th class="num">FIFO SLA (est.)</th><th class="num">Hours Saved</th><th class="num">SLA Gain (pp)</th></tr></thead>
            <tbody>
            {% for tier, actual in cmp.with_prioritization.items() %}
                {% set baseline = cmp.without_prioritization[tier] %}
                {% set gain = cmp.improvement.get(tier) %}
                <tr>
                    <td><span class="badge badge-{{ tier }}">{{ tier }}</span></td>
                    <td class="num">{{ actual.average_hours }}</td>
                    <td class="num">{{ baseline.average_hours }}</td>
                    <td class="num">{{ actual.sla_compliance }}%</td>
                    <td class="num">{{ baseline.sla_compliance }}%</td>
                    <td class="num">{% if gain %}{{ gain.time_saved_hours }} ({{ gain.time_saved_percent }}%){% else %}-{% endif %}</td>
                    <td class="num">{% if gain %}{{ gain.sla_improvement }}{% else %}-{% endif %}</td>
                </tr>
            {% endfor %}
            </tbody>
        </table>
        <p class="note">{{ cmp.note }}</p>
    </div>

    {% if trends %}
    <div class="card">
        <h2>Daily Submissions</h2>
        <table>
            <thead><tr><th>Date</th><th class="num">Urgent</th><th class="num">Standard</th><th class="num">Routine</th><th class="num">Total</th></tr></thead>
            <tbody>
            {% for point in trends %}
                <tr><td>{{ point.day }}</td><td class="num">{{ point.urgent }}</td><td class="num">{{ point.standard }}</td>
                    <td class="num">{{ point.routine }}</td><td class="num">{{ point.total }}</td></tr>
            {% endfor %}
            </tbody>
        </table>
    </div>
    {% endif %}
</body>
</html>"""
