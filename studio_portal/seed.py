"""Bundled starter content.

Used when a collection has never been persisted (with SEED_DATA on) and
by the data reset operation. seed_collections() builds fresh dicts on
every call so callers can mutate the result freely.
"""


def _divisions() -> list[dict]:
    return [
        {
            'id': 'd1', 'type': 'Labs', 'title': 'Labs',
            'tagline': 'Research and rapid prototyping.',
            'description': 'Applied research, AI tooling and technical discovery.',
            'icon_name': 'FlaskConical', 'color': 'text-cyan-400',
            'theme_color': '#22d3ee', 'banner_image': None,
        },
        {
            'id': 'd2', 'type': 'Studios', 'title': 'Studios',
            'tagline': 'Product design and engineering.',
            'description': 'Web platforms, dashboards and design systems.',
            'icon_name': 'Layers', 'color': 'text-blue-400',
            'theme_color': '#60a5fa', 'banner_image': None,
        },
        {
            'id': 'd3', 'type': 'Immersive', 'title': 'Immersive',
            'tagline': 'VR, AR and spatial experiences.',
            'description': 'Headset builds, photogrammetry and installations.',
            'icon_name': 'Glasses', 'color': 'text-violet-400',
            'theme_color': '#a78bfa', 'banner_image': None,
        },
        {
            'id': 'd4', 'type': 'Entertainment', 'title': 'Entertainment',
            'tagline': 'Stories, games and live shows.',
            'description': 'Interactive storytelling and game production.',
            'icon_name': 'Clapperboard', 'color': 'text-rose-400',
            'theme_color': '#fb7185', 'banner_image': None,
        },
    ]


def _projects() -> list[dict]:
    return [
        {
            'id': 'p1', 'division_id': 'd1', 'title': 'Forecasting Sandbox',
            'client': 'Northwind Logistics',
            'summary': 'Demand forecasting prototype for regional hubs.',
            'content': '', 'images': [], 'year': '2024',
        },
        {
            'id': 'p2', 'division_id': 'd2', 'title': 'Trading Portal Revamp',
            'client': 'AlphaBank Global',
            'summary': 'Enterprise trading portal with latency SLAs.',
            'content': '', 'images': [], 'year': '2024',
        },
        {
            'id': 'p3', 'division_id': 'd3', 'title': 'Virtual Museum Tour',
            'client': 'National History Org',
            'summary': 'Accessible VR tour of the permanent collection.',
            'content': '', 'images': [], 'year': '2024',
        },
    ]


def _team() -> list[dict]:
    members = [
        ('t1', 'Sarah Chen', 'Engineering Lead'),
        ('t2', 'James Wilson', 'Performance Engineer'),
        ('t3', 'Elena Rodriguez', 'Accessibility Lead'),
        ('t4', 'Aisha Gupta', 'Content Strategist'),
        ('t5', 'Marcus Thorne', 'Delivery Manager'),
        ('t6', 'Yuki Tanaka', 'Technical Artist'),
    ]
    return [
        {
            'id': id, 'name': name, 'role': role, 'bio': '', 'image': '',
            'linked_in': None, 'project_ids': [], 'csr_activities': [],
            'skills': [], 'interests': [], 'quote': None,
            'learning_stats': None, 'fitness_stats': None,
        }
        for id, name, role in members
    ]


def _initiatives() -> list[dict]:
    return [
        {
            'id': 'i1', 'title': 'Code Clubs',
            'image': '', 'description': 'Weekly coding sessions for local schools.',
            'full_content': '', 'icon_name': 'GraduationCap', 'color': 'text-emerald-400',
            'bg_hover': '', 'text_hover': '',
            'stats': [{'name': 'Students reached', 'value': 420, 'unit': ''}],
        },
        {
            'id': 'i2', 'title': 'Green Render Farm',
            'image': '', 'description': 'Renewable-powered rendering for all projects.',
            'full_content': '', 'icon_name': 'Leaf', 'color': 'text-lime-400',
            'bg_hover': '', 'text_hover': '',
            'stats': [{'name': 'CO2 avoided', 'value': 12, 'unit': 't'}],
        },
    ]


def _client_projects() -> list[dict]:
    return [
        {
            'id': 'cp1', 'project_id': 'p2',
            'client_name': 'AlphaBank Global', 'name': 'AlphaBank Trading Portal',
            'summary': 'Enterprise-grade trading portal revamp with latency SLAs.',
            'status': 'On Track', 'health': 'green', 'status_override': None,
            'progress': 33, 'budget_used': 64,
            'start_date': '2024-02-05', 'end_date': '2024-08-01',
            'next_milestone': 'Beta handoff on Jun 28',
            'team': ['t1', 't2', 't5'],
            'resources': [
                {'id': 'res-cp1-1', 'label': 'Figma design system',
                 'url': 'https://www.figma.com/file/alpha-bank-system',
                 'type': 'design', 'description': 'Components, tokens and signed-off flows.'},
            ],
            'tasks': [
                {'id': 'task-cp1-1', 'title': 'Performance profiling on heatmaps',
                 'status': 'in_progress', 'owner': 'James Wilson',
                 'due_date': '2024-06-15', 'highlight': 'Target p95 < 180ms'},
                {'id': 'task-cp1-2', 'title': 'Copy and compliance review',
                 'status': 'done', 'owner': 'Aisha Gupta',
                 'due_date': '2024-05-30', 'highlight': ''},
                {'id': 'task-cp1-3', 'title': 'Pen-test remediation batch 1',
                 'status': 'todo', 'owner': 'Sarah Chen',
                 'due_date': '2024-06-10', 'highlight': 'Awaiting VPN allowlist'},
            ],
            'timeline': [
                {'id': 'tl-cp1-1', 'label': 'Discovery and research', 'date': '2024-02-29',
                 'status': 'complete', 'description': 'Stakeholder workshops and audits.'},
                {'id': 'tl-cp1-2', 'label': 'Beta build', 'date': '2024-06-28',
                 'status': 'active', 'description': 'Feature complete beta to client UAT.'},
                {'id': 'tl-cp1-3', 'label': 'Launch', 'date': '2024-08-01',
                 'status': 'upcoming', 'description': 'Production cutover and training.'},
            ],
            'updates': [
                {'id': 'upd-cp1-1', 'title': 'Latency down 18%', 'date': '2024-05-28',
                 'author': 'Sarah Chen', 'type': 'win',
                 'summary': 'Caching on the order book view cut p95 latency by 18%.'},
                {'id': 'upd-cp1-2', 'title': 'Blocked: SSO sandbox access', 'date': '2024-05-22',
                 'author': 'James Wilson', 'type': 'risk', 'impact': 'Medium',
                 'summary': 'Need client approval for a new OAuth app to finish UAT setup.'},
            ],
            'links': [
                {'id': 'link-cp1-1', 'label': 'Sprint board',
                 'url': 'https://linear.app/studio/alphabank',
                 'type': 'ticket', 'description': 'Active sprint, bugs and backlog.'},
            ],
        },
        {
            'id': 'cp2', 'project_id': 'p3',
            'client_name': 'National History Org', 'name': 'Virtual Museum Tour',
            'summary': 'Immersive VR tour with accessibility-first interactions.',
            'status': 'At Risk', 'health': 'amber', 'status_override': None,
            'progress': 33, 'budget_used': 62,
            'start_date': '2024-01-10', 'end_date': '2024-07-15',
            'next_milestone': 'Final artifact import on Jun 20',
            'team': ['t3', 't6'],
            'resources': [],
            'tasks': [
                {'id': 'task-cp2-1', 'title': 'Accessibility QA sweep',
                 'status': 'in_progress', 'owner': 'Elena Rodriguez',
                 'due_date': '2024-06-12', 'highlight': 'VoiceOver and captions across scenes.'},
                {'id': 'task-cp2-2', 'title': 'Lighting pass for Hall B',
                 'status': 'done', 'owner': 'Yuki Tanaka',
                 'due_date': '2024-05-26', 'highlight': ''},
                {'id': 'task-cp2-3', 'title': 'Client content approvals',
                 'status': 'todo', 'owner': 'Miguel Torres',
                 'due_date': '2024-06-05', 'highlight': 'Need sign-off on 32 artifacts.'},
            ],
            'timeline': [
                {'id': 'tl-cp2-1', 'label': 'Photogrammetry batch 1', 'date': '2024-02-20',
                 'status': 'complete', 'description': '150 artifacts scanned.'},
                {'id': 'tl-cp2-2', 'label': 'Final content ingest', 'date': '2024-06-20',
                 'status': 'active', 'description': 'Client delivery of remaining assets.'},
            ],
            'updates': [
                {'id': 'upd-cp2-1', 'title': 'Risk: content approvals slipping',
                 'date': '2024-05-24', 'author': 'Elena Rodriguez', 'type': 'risk',
                 'impact': 'High',
                 'summary': 'Approval backlog may push artifact ingest by about 4 days.'},
            ],
            'links': [],
        },
    ]


def _client_invoices() -> list[dict]:
    return [
        {
            'id': 'inv-1001', 'project_id': 'p2', 'amount': 48000, 'currency': 'USD',
            'status': 'paid', 'issued_on': '2024-03-01', 'due_on': '2024-03-31',
            'description': 'Discovery and design sprint', 'download_url': None,
        },
        {
            'id': 'inv-1002', 'project_id': 'p2', 'amount': 62000, 'currency': 'USD',
            'status': 'due', 'issued_on': '2024-06-01', 'due_on': '2024-06-30',
            'description': 'Beta build milestone', 'download_url': None,
        },
        {
            'id': 'inv-2001', 'project_id': 'p3', 'amount': 35000, 'currency': 'EUR',
            'status': 'overdue', 'issued_on': '2024-04-15', 'due_on': '2024-05-15',
            'description': 'Photogrammetry batch 1', 'download_url': None,
        },
    ]


def seed_collections() -> dict[str, list[dict]]:
    """Return fresh seed records for every collection."""
    return {
        'divisions': _divisions(),
        'projects': _projects(),
        'team': _team(),
        'initiatives': _initiatives(),
        'contact_submissions': [],
        'client_projects': _client_projects(),
        'client_invoices': _client_invoices(),
        'client_users': [],
    }
