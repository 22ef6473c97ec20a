"""Tests for Property domain models."""

import unittest

from domain.model.property import Documents, PersonalDetails, Property, PropertyDetails


class TestProperty(unittest.TestCase):

    def setUp(self):
        self.personal = PersonalDetails(
            full_name='Asha Rao', contact_no='98765', email='asha@example.com',
            current_address_line1='12 MG Road', current_city='Pune',
            current_state='MH', current_pincode='411001',
        )
        self.details = PropertyDetails(
            property_address_line1='44 FC Road', property_city='Pune',
            property_state='MH', property_pincode='411004', property_name='Sunrise',
            property_type='Apartment', bhk_type='2BHK', furnishing_status='Furnished',
            property_price=25000, security_deposit=100000,
        )

    def test_create_assigns_id_and_empty_documents(self):
        prop = Property.create('u1', self.personal, self.details)

        self.assertTrue(prop.id)
        self.assertEqual(prop.created_at, prop.updated_at)
        self.assertEqual(prop.documents, Documents())

    def test_wire_format_always_has_four_document_lists(self):
        prop = Property.create('u1', self.personal, self.details, Documents(floor_plan=['u']))

        data = prop.to_dict()

        self.assertEqual(data['userId'], 'u1')
        self.assertEqual(data['documents'], {
            'identityProof': [], 'ownershipProof': [], 'propertyPhotos': [], 'floorPlan': ['u'],
        })
        self.assertEqual(data['personalDetails']['fullName'], 'Asha Rao')
        self.assertEqual(data['propertyDetails']['bhkType'], '2BHK')

    def test_documents_from_partial_dict(self):
        docs = Documents.from_dict({'propertyPhotos': ['a']})

        self.assertEqual(docs.property_photos, ['a'])
        self.assertEqual(docs.identity_proof, [])


if __name__ == '__main__':
    unittest.main()
