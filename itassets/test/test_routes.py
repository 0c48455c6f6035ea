"""
Tests for the JSON API and its error mapping
"""


def _create_site(client, name, city='Soacha', address='Calle 13 # 7-21'):
    return client.post('/api/sites', json={'name': name, 'city': city, 'address': address})


def _create_asset(client, site_id, serial='PF3K2L9'):
    return client.post('/api/assets', json={
        'site_id': site_id, 'brand': 'Lenovo', 'serial': serial, 'asset_type': 'laptop',
    })


def test_create_and_list_sites(client):
    response = _create_site(client, "Medicuc Soacha")
    assert response.status_code == 201
    body = response.get_json()
    assert body['prefix'] == 'MSOA'
    assert body['asset_seq'] == 0
    assert body['prefix_note'] == ''

    listed = client.get('/api/sites').get_json()
    assert [s['prefix'] for s in listed] == ['MSOA']
    assert listed[0]['asset_count'] == 0


def test_site_creation_errors(client):
    response = _create_site(client, "Medicuc")
    assert response.status_code == 400
    assert response.get_json()['error'] == 'ValueError'

    for name in ("Medicuc Soacha", "Medicuc Soachita", "Medicuc Soachona", "Medicuc Soa"):
        assert _create_site(client, name).status_code == 201
    response = _create_site(client, "Medicuc Soacha")
    assert response.status_code == 409
    assert response.get_json()['error'] == 'PrefixCollision'


def test_prefix_preview(client):
    _create_site(client, "TecnoGlobal Bogota")
    preview = client.post('/api/sites/prefix-preview', json={'name': "TecnoGlobal Bogotana"}).get_json()
    assert preview['prefix'] == 'TEBO'
    assert preview['unique'] is True
    assert preview['note']


def test_site_prefix_is_locked(client):
    site = _create_site(client, "Medicuc Soacha").get_json()

    response = client.patch(f"/api/sites/{site['id']}", json={'prefix': 'ZZZZ'})
    assert response.status_code == 409
    assert response.get_json()['error'] == 'PrefixLockedError'

    response = client.patch(f"/api/sites/{site['id']}", json={'name': 'Salud Familia Sabana'})
    assert response.status_code == 200
    assert response.get_json()['prefix'] == 'MSOA'


def test_delete_site(client):
    site = _create_site(client, "Medicuc Soacha").get_json()
    _create_asset(client, site['id'])
    assert client.delete(f"/api/sites/{site['id']}").status_code == 400

    empty = _create_site(client, "Salud Familia Sabana").get_json()
    assert client.delete(f"/api/sites/{empty['id']}").status_code == 204
    assert client.delete(f"/api/sites/{empty['id']}").status_code == 404


def test_asset_registration_and_relocation(client):
    soacha = _create_site(client, "Medicuc Soacha").get_json()
    sabana = _create_site(client, "Salud Familia Sabana").get_json()

    response = _create_asset(client, soacha['id'])
    assert response.status_code == 201
    asset = response.get_json()
    assert asset['fixed_asset_id'] == 'MSOA-001'
    assert asset['code_history'] == ['MSOA-001']
    assert 'version' not in asset

    response = client.post(f"/api/assets/{asset['id']}/relocate", json={'site_id': sabana['id']})
    assert response.status_code == 200
    assert response.get_json() == {'changed': True, 'fixed_asset_id': 'SFSA-001', 'site_id': sabana['id']}

    response = client.post(f"/api/assets/{asset['id']}/relocate", json={'site_id': sabana['id']})
    assert response.get_json()['changed'] is False

    found = client.get('/api/assets/by-code/MSOA-001').get_json()
    assert found['id'] == asset['id']
    assert found['previous_fixed_asset_ids'] == ['MSOA-001']
    assert found['code_history'] == ['MSOA-001', 'SFSA-001']

    listed = client.get(f"/api/assets?site_id={sabana['id']}").get_json()
    assert [a['fixed_asset_id'] for a in listed] == ['SFSA-001']


def test_asset_errors(client):
    assert client.post('/api/assets', json={'brand': 'HP', 'serial': 'X'}).status_code == 400

    response = _create_asset(client, 9999)
    assert response.status_code == 404
    assert response.get_json()['error'] == 'NotFound'

    assert client.get('/api/assets/by-code/NOPE-001').status_code == 404
    assert client.get('/api/assets/12345').status_code == 404
    assert client.post('/api/assets/12345/relocate', json={'site_id': 1}).status_code == 404


def test_asset_edit_cannot_change_code(client):
    site = _create_site(client, "Medicuc Soacha").get_json()
    asset = _create_asset(client, site['id']).get_json()

    response = client.patch(f"/api/assets/{asset['id']}", json={'fixed_asset_id': 'MSOA-999'})
    assert response.status_code == 400

    response = client.patch(f"/api/assets/{asset['id']}", json={'status': 'assigned'})
    assert response.status_code == 400, "Assigned status needs a custodian"

    response = client.patch(f"/api/assets/{asset['id']}", json={
        'status': 'assigned', 'assigned_to_name': 'Laura Perez', 'assigned_to_position': 'Nurse',
    })
    assert response.status_code == 200
    assert response.get_json()['assigned_to_name'] == 'Laura Perez'


def test_supplier_and_invoice_flow(client):
    site = _create_site(client, "Medicuc Soacha").get_json()

    response = client.post('/api/suppliers', json={'name': 'Acme Tecnologia', 'nit': '900123456-1'})
    assert response.status_code == 201
    supplier = response.get_json()
    assert client.post('/api/suppliers', json={'name': 'Copy', 'nit': '900123456-1'}).status_code == 400

    invoice = {
        'supplier_id': supplier['id'], 'site_id': site['id'],
        'number': 'FE-1020', 'description': 'Laptops', 'total': 1500000,
    }
    response = client.post('/api/invoices', json=invoice)
    assert response.status_code == 201
    created = response.get_json()
    assert created['status'] == 'pending'
    assert created['total'] == 1500000.0

    response = client.post('/api/invoices', json=dict(invoice, number='fe 1020'))
    assert response.status_code == 409
    assert response.get_json()['error'] == 'DuplicateInvoiceNumber'

    check = client.get(f"/api/invoices/duplicate-check?supplier_id={supplier['id']}&number=fe1020")
    assert check.get_json() == {'duplicate': True}
    check = client.get(
        f"/api/invoices/duplicate-check?supplier_id={supplier['id']}&number=fe1020&excluding_id={created['id']}"
    )
    assert check.get_json() == {'duplicate': False}

    response = client.patch(f"/api/invoices/{created['id']}", json={'status': 'paid'})
    assert response.status_code == 200
    assert response.get_json()['status'] == 'paid'

    found = client.get('/api/invoices?number=1020').get_json()
    assert [i['number'] for i in found] == ['FE-1020']


def test_security_headers(client):
    response = client.get('/api/sites')
    assert response.headers['X-Frame-Options'] == 'SAMEORIGIN'
    assert response.headers['X-Content-Type-Options'] == 'nosniff'


def test_next_code_preview_does_not_allocate(client):
    site = _create_site(client, "Medicuc Soacha").get_json()
    _create_asset(client, site['id'])

    url = f"/api/sites/{site['id']}/next-code-preview"
    assert client.get(url).get_json() == {'site_id': site['id'], 'next_code': 'MSOA-002'}
    assert client.get(url).get_json()['next_code'] == 'MSOA-002', "Preview must not move the counter"

    listed = client.get('/api/sites').get_json()
    assert listed[0]['asset_seq'] == 1

    assert _create_asset(client, site['id'], serial='SECOND').get_json()['fixed_asset_id'] == 'MSOA-002'
    assert client.get('/api/sites/9999/next-code-preview').status_code == 404


def test_assign_and_return_flow(client):
    site = _create_site(client, "Medicuc Soacha").get_json()
    asset = _create_asset(client, site['id']).get_json()

    response = client.post(f"/api/assets/{asset['id']}/assign", json={'name': 'Laura Perez'})
    assert response.status_code == 400

    response = client.post(f"/api/assets/{asset['id']}/assign", json={'name': 'Laura Perez', 'position': 'Nurse'})
    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'assigned'
    assert body['assigned_at'] is not None

    found = client.get('/api/assets?assigned_to=laura').get_json()
    assert [a['id'] for a in found] == [asset['id']]
    assert [a['id'] for a in client.get('/api/assets?q=perez').get_json()] == [asset['id']]

    body = client.post(f"/api/assets/{asset['id']}/return").get_json()
    assert body['status'] == 'storage'
    assert body['assigned_to_name'] is None
    assert body['assigned_at'] is None
    assert client.get('/api/assets?assigned_to=laura').get_json() == []
