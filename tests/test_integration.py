import unittest
from web_interface import app as web


class TestWebInterface(unittest.TestCase):

    def setUp(self):
        """Set up a fresh ledger with Alice, Bob and a funded faucet"""
        web.reset_state()
        self.client = web.app.test_client()

        self.alice = self.post('/api/accounts', {'name': 'Alice'})['account_id']
        self.bob = self.post('/api/accounts', {'name': 'Bob'})['account_id']
        self.carol = self.post('/api/accounts', {'name': 'Carol'})['account_id']
        self.faucet = self.post('/api/faucets', {'symbol': 'INH', 'decimals': 8, 'max_supply': 1_000_000})['faucet_id']
        self.post(f'/api/accounts/{self.alice}/mint', {'faucet_id': self.faucet, 'amount': 1000})

    def post(self, url, payload, status=200):
        response = self.client.post(url, json=payload)
        self.assertEqual(response.status_code, status, response.get_json())
        return response.get_json()

    def balance(self, account):
        response = self.client.get(f'/api/accounts/{account}/balance?faucet_id={self.faucet}')
        return response.get_json()['balance']

    def create_vault(self, deadline=5):
        data = self.post('/api/vaults', {
            'owner': self.alice,
            'beneficiary': self.bob,
            'faucet_id': self.faucet,
            'amount': 10,
            'deadline': deadline
        })
        return data['vault']

    def test_full_inheritance_flow(self):
        """Test lock, early rejection, deadline and beneficiary claim"""
        vault = self.create_vault(deadline=5)
        self.assertEqual(vault['beneficiary_id'], self.bob)
        self.assertEqual(vault['blocks_remaining'], 5)
        self.assertEqual(self.balance(self.alice), 990)

        early = self.post(f"/api/vaults/{vault['vault_id']}/consume", {'caller': self.bob}, status=400)
        self.assertEqual(early['code'], 'TOO_EARLY')

        stranger = self.post(f"/api/vaults/{vault['vault_id']}/consume", {'caller': self.carol}, status=400)
        self.assertEqual(stranger['code'], 'WRONG_BENEFICIARY')

        self.assertEqual(self.post('/api/chain/advance', {'blocks': 5})['block_num'], 5)

        claimed = self.post(f"/api/vaults/{vault['vault_id']}/consume", {'caller': self.bob})
        self.assertEqual(claimed['release']['path'], 'claim')
        self.assertEqual(self.balance(self.bob), 10)

        again = self.post(f"/api/vaults/{vault['vault_id']}/consume", {'caller': self.alice}, status=400)
        self.assertEqual(again['code'], 'VAULT_CONSUMED')

        info = self.client.get(f"/api/vaults/{vault['vault_id']}").get_json()
        self.assertTrue(info['consumed'])

    def test_owner_extends_deadline(self):
        """Test proof-of-life through the HTTP surface"""
        vault = self.create_vault(deadline=5)
        self.post('/api/chain/advance', {'blocks': 4})

        extended = self.post(f"/api/vaults/{vault['vault_id']}/extend", {'owner': self.alice, 'deadline': 50})
        self.assertEqual(extended['vault']['deadline'], 50)
        self.assertNotEqual(extended['vault']['vault_id'], vault['vault_id'])

        self.post('/api/chain/advance', {'blocks': 10})
        early = self.post(f"/api/vaults/{extended['vault']['vault_id']}/consume", {'caller': self.bob}, status=400)
        self.assertEqual(early['code'], 'TOO_EARLY')

        refused = self.post(f"/api/vaults/{extended['vault']['vault_id']}/extend", {'owner': self.bob}, status=400)
        self.assertEqual(refused['code'], 'NOT_VAULT_OWNER')

    def test_blocks_remaining_counts_down_to_zero(self):
        """Test blocks_remaining reaches zero at the deadline and stays there"""
        vault = self.create_vault(deadline=5)
        url = f"/api/vaults/{vault['vault_id']}"
        self.post('/api/chain/advance', {'blocks': 3})
        self.assertEqual(self.client.get(url).get_json()['vault']['blocks_remaining'], 2)
        self.post('/api/chain/advance', {'blocks': 2})
        self.assertEqual(self.client.get(url).get_json()['vault']['blocks_remaining'], 0)
        self.post('/api/chain/advance', {'blocks': 7})
        self.assertEqual(self.client.get(url).get_json()['vault']['blocks_remaining'], 0)

    def test_owner_reclaims(self):
        vault = self.create_vault(deadline=5)
        reclaimed = self.post(f"/api/vaults/{vault['vault_id']}/consume", {'caller': self.alice})
        self.assertEqual(reclaimed['release']['path'], 'reclaim')
        self.assertEqual(self.balance(self.alice), 1000)

    def test_unknown_vault(self):
        response = self.client.get('/api/vaults/' + '00' * 32)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()['code'], 'UNKNOWN_VAULT')

    def test_insufficient_balance(self):
        data = self.post('/api/vaults', {
            'owner': self.bob,
            'beneficiary': self.alice,
            'faucet_id': self.faucet,
            'amount': 10
        }, status=400)
        self.assertEqual(data['code'], 'INSUFFICIENT_BALANCE')

    def test_default_deadline_from_config(self):
        self.post('/api/chain/advance', {'blocks': 7})
        data = self.post('/api/vaults', {
            'owner': self.alice,
            'beneficiary': self.bob,
            'faucet_id': self.faucet
        })
        self.assertEqual(data['vault']['deadline'], 7 + web.config.deadline_offset_blocks)
        self.assertEqual(self.balance(self.alice), 1000 - web.config.lock_amount)


if __name__ == '__main__':
    unittest.main()
